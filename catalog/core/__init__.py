"""
Core utilities shared across the catalog application.

This package hosts:
- configuration helpers (env vars, database URL, feature flags)
- logging setup
- anti-forgery (CSRF) helpers used by every form POST
"""
