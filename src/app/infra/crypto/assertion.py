"""Emissão de asserções assinadas (JWT RS256) para autenticar a App.

A asserção é emitida 60s no passado (tolerância a clock skew) e expira
600s após ``now``. Cada chamada gera uma asserção independente.

O payload é serializado aqui e assinado via ``jwt.api_jws``: o claim
``iss`` precisa sair numérico e ``jwt.encode`` só aceita issuer string.
"""

from __future__ import annotations

import json
import time

from jwt import api_jws

from app.domain.identity import (
    ASSERTION_BACKDATE_SECONDS,
    ASSERTION_TTL_SECONDS,
    AppIdentity,
    SignedAssertion,
)
from app.infra.crypto.keys import load_private_key
from utils.errors import ConfigurationError, SigningError

ASSERTION_ALGORITHM = "RS256"


def _parse_issuer(app_id: int | str) -> int:
    if isinstance(app_id, bool):
        raise ConfigurationError("GitHub App ID must be numeric")
    if isinstance(app_id, int):
        issuer = app_id
    else:
        try:
            issuer = int(str(app_id).strip(), 10)
        except ValueError as exc:
            raise ConfigurationError("GitHub App ID must be numeric") from exc
    if issuer <= 0:
        raise ConfigurationError("GitHub App ID must be positive")
    return issuer


def mint(identity: AppIdentity | None, now: float | None = None) -> SignedAssertion:
    """Emite asserção assinada para a identidade da App.

    A validação de configuração acontece antes de qualquer operação
    criptográfica, de forma que credenciais ausentes nunca viram
    SigningError.

    Args:
        identity: AppIdentity com app_id e private_key
        now: Epoch em segundos (usa time.time() se None)

    Returns:
        SignedAssertion com issued_at = now - 60 e expires_at = now + 600

    Raises:
        ConfigurationError: app_id/private_key ausente ou app_id não numérico
        SigningError: Chave malformada ou falha na assinatura
    """
    if identity is None:
        raise ConfigurationError("GitHub App ID and private key are required")

    app_id = identity.app_id
    if app_id is None or (isinstance(app_id, str) and not app_id.strip()):
        raise ConfigurationError("GitHub App ID and private key are required")
    if not identity.private_key or not identity.private_key.strip():
        raise ConfigurationError("GitHub App ID and private key are required")

    issuer = _parse_issuer(app_id)
    anchor = int(time.time() if now is None else now)
    issued_at = anchor - ASSERTION_BACKDATE_SECONDS
    expires_at = anchor + ASSERTION_TTL_SECONDS

    private_key = load_private_key(identity.private_key)
    claims = {"iat": issued_at, "exp": expires_at, "iss": issuer}
    try:
        payload = json.dumps(claims, separators=(",", ":")).encode("utf-8")
        token = api_jws.encode(payload, private_key, algorithm=ASSERTION_ALGORITHM)
    except Exception as exc:
        raise SigningError(f"Failed to sign assertion: {exc}") from exc

    return SignedAssertion(
        issued_at=issued_at,
        expires_at=expires_at,
        issuer=issuer,
        token=token,
    )
