"""Coordenação de webhooks: dispatcher, registro e handlers."""

from .dispatcher import EventDispatcher, RoutedDelivery
from .registry import HandlerRegistry

__all__ = ["EventDispatcher", "HandlerRegistry", "RoutedDelivery"]
