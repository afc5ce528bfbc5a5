"""
High-level use cases for the Link Hub API.

The selector picks the repository for the configured data source and the
data_service module exposes the flat CRUD facade on top of it. Routers call
the facade instead of touching a repository directly.
"""
