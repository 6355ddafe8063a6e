"""Webhook GitHub: leitura de headers e corpo bruto."""

from .receive import DELIVERY_HEADER, EVENT_HEADER, SIGNATURE_HEADER, build_inbound_event

__all__ = [
    "DELIVERY_HEADER",
    "EVENT_HEADER",
    "SIGNATURE_HEADER",
    "build_inbound_event",
]
