"""Connectors — adapters de borda para APIs externas.

Estrutura:
- github/: REST API do GitHub (cliente httpx) e leitura de webhooks
"""

__all__: list[str] = []
