"""Health check e informação do serviço."""
