"""Rotas HTTP da API — adapters de entrada.

Estrutura:
- routes/github/: webhook da GitHub App
- routes/app_info/: API informativa (App, instalações, issue de teste)
- routes/health/: health check e informação do serviço

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
