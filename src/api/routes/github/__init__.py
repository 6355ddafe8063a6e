"""Webhook da GitHub App."""
