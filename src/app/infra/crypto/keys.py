"""Carregamento da chave privada RSA da App."""

from __future__ import annotations

from typing import Any

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from utils.errors import SigningError


def load_private_key(private_key_pem: str) -> Any:
    """Carrega chave privada RSA em formato PEM (PKCS#1 ou PKCS#8).

    Raises:
        SigningError: Se a chave for inválida, cifrada ou não for RSA
    """
    try:
        key = serialization.load_pem_private_key(
            private_key_pem.encode("utf-8"),
            password=None,
            backend=default_backend(),
        )
    except Exception as exc:
        raise SigningError(f"Invalid private key: {exc}") from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise SigningError(f"Unsupported key type: {type(key).__name__}")
    return key
