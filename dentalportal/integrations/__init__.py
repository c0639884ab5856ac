"""Clients for external services: geocoding and object storage."""
