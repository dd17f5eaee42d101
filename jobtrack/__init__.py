"""Multi-tenant job tracking API."""
