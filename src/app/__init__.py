"""App — núcleo do serviço: domínio, serviços, coordenação e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: dispatcher de webhooks e handlers por tipo de evento
- domain/: tipos imutáveis (identidade, eventos, payloads, rate limit)
- services/: troca de credencial e invocador com backoff
- infra/: implementações concretas de IO (crypto, http)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas

Padrão: app executa; api adapta; config parametriza; utils apoia.
"""
