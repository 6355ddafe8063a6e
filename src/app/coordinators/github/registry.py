"""Tabela de roteamento ``event_type -> handlers``.

Montada uma vez no bootstrap; a composição é imutável depois disso.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.coordinators.github.handlers.base import EventHandler


class HandlerRegistry:
    """Registro imutável de handlers por tipo de evento."""

    __slots__ = ("_routes",)

    def __init__(self, handlers: Iterable[EventHandler]) -> None:
        routes: dict[str, list[EventHandler]] = {}
        for handler in handlers:
            if not handler.event_types:
                raise ValueError(f"handler sem event_types: {handler!r}")
            for event_type in handler.event_types:
                routes.setdefault(event_type, []).append(handler)
        self._routes: dict[str, tuple[EventHandler, ...]] = {
            event_type: tuple(items) for event_type, items in routes.items()
        }

    def handlers_for(self, event_type: str) -> tuple[EventHandler, ...]:
        return self._routes.get(event_type, ())

    @property
    def event_types(self) -> frozenset[str]:
        return frozenset(self._routes)

    def describe(self) -> dict[str, dict[str, list[str]]]:
        """Enumera a tabela completa: evento → handler → ações."""
        table: dict[str, dict[str, list[str]]] = {}
        for event_type, handlers in sorted(self._routes.items()):
            table[event_type] = {
                handler.name: sorted(getattr(handler, "actions", ()))
                for handler in handlers
            }
        return table
