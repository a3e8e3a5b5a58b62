"""
Admin Use Cases

Platform administration of tenants.
"""

from .change_tenant_status_use_case import ChangeTenantStatusUseCase

__all__ = [
    "ChangeTenantStatusUseCase",
]
