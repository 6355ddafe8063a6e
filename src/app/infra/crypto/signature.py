"""Validação de assinatura HMAC-SHA256 para webhooks."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass

from utils.errors import VerificationFailure

SIGNATURE_PREFIX = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação.

    ``skipped`` indica que não havia secret configurado: a entrega passou
    sem verificação, o que é diferente de uma assinatura válida.
    """

    valid: bool
    skipped: bool = False
    error: str | None = None


def compute_signature(payload: bytes, secret: str) -> str:
    """Calcula ``sha256=<hex>`` para o corpo bruto."""
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def check_signature(
    payload: bytes,
    signature: str | None,
    secret: str | None,
) -> SignatureResult:
    """Valida assinatura HMAC-SHA256 do webhook.

    Args:
        payload: Corpo bruto da requisição
        signature: Header X-Hub-Signature-256
        secret: Secret do webhook (None/vazio = modo permissivo de dev)

    Returns:
        SignatureResult
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    expected = compute_signature(payload, secret)
    # Comparação em bytes: compare_digest rejeita str não-ASCII
    if hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8")):
        return SignatureResult(valid=True)
    return SignatureResult(valid=False, error="invalid_signature")


def verify_signature(
    payload: bytes,
    signature: str | None,
    secret: str | None,
) -> bool:
    """Versão booleana de check_signature."""
    return check_signature(payload, signature, secret).valid


def ensure_signature(
    payload: bytes,
    signature: str | None,
    secret: str | None,
) -> SignatureResult:
    """Como check_signature, mas levanta VerificationFailure se inválida.

    Raises:
        VerificationFailure: Assinatura ausente ou divergente
    """
    result = check_signature(payload, signature, secret)
    if not result.valid:
        raise VerificationFailure(result.error or "invalid_signature")
    return result
