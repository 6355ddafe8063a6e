"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="github_app_gateway")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("webhook_received", extra={"event": "issues"})

Campos obrigatórios em todo log:
- correlation_id (X-GitHub-Delivery em webhooks)
- service
- level
- logger
- message
- asctime

Nunca logar tokens, chaves ou payloads brutos.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter, CredentialRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "CredentialRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
