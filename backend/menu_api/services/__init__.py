"""
Application services.

Layout:
    base_service.py  BaseService / BaseCRUDService
    crud/            repositories
    permissions/     ownership chain resolver
    domain/          entity services and metrics
"""
