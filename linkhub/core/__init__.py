"""
Core utilities shared across the Link Hub service.

This package hosts:
- configuration helpers (env vars, data source selection)
- the error taxonomy raised by repositories/services
- logging setup and cache revalidation hooks

Repositories and services depend on these primitives instead of reading
os.environ or FastAPI state directly.
"""
