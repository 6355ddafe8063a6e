"""Criptografia da App: asserções RS256 e assinatura de webhooks."""

from .assertion import ASSERTION_ALGORITHM, mint
from .keys import load_private_key
from .signature import (
    SIGNATURE_PREFIX,
    SignatureResult,
    check_signature,
    compute_signature,
    ensure_signature,
    verify_signature,
)

__all__ = [
    "ASSERTION_ALGORITHM",
    "SIGNATURE_PREFIX",
    "SignatureResult",
    "check_signature",
    "compute_signature",
    "ensure_signature",
    "load_private_key",
    "mint",
    "verify_signature",
]
