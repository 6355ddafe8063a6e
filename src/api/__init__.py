"""API — camada de borda.

Responsabilidades:
- Receber entregas de webhook e requests da API informativa
- Falar com a REST API do GitHub (connectors)
- Traduzir resultados do núcleo em respostas HTTP

Subpastas:
- connectors/: cliente da REST API e leitura de webhooks
- routes/: endpoints HTTP (webhook, health, API informativa)

NÃO PODE conter: regras de dispatch, troca de credencial, retry.
"""
