"""API informativa da GitHub App."""
