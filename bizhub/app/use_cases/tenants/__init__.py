"""
Tenant Management Use Cases

Provisioning, resolution, settings and lifecycle of tenants.
"""

from .cancel_tenant_use_case import CancelTenantUseCase
from .check_feature_use_case import CheckFeatureUseCase
from .create_tenant_use_case import CreateTenantUseCase
from .dtos import (
    CreateTenantCommand,
    CreateTenantResponse,
    CurrentTenantResponse,
    FeatureResponse,
    SegmentInfo,
    TenantInfo,
    TenantStatusResponse,
    UpdateTenantSettingsCommand,
)
from .list_segments_use_case import ListSegmentsUseCase
from .resolve_tenant_use_case import ResolveTenantUseCase
from .update_tenant_settings_use_case import UpdateTenantSettingsUseCase

__all__ = [
    "CreateTenantUseCase",
    "ResolveTenantUseCase",
    "UpdateTenantSettingsUseCase",
    "CancelTenantUseCase",
    "CheckFeatureUseCase",
    "ListSegmentsUseCase",
    "CreateTenantCommand",
    "CreateTenantResponse",
    "CurrentTenantResponse",
    "FeatureResponse",
    "SegmentInfo",
    "TenantInfo",
    "TenantStatusResponse",
    "UpdateTenantSettingsCommand",
]
