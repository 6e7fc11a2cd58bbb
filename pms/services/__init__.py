"""Services for Provider Management Service."""

from .attribute_binding import (ProviderRoleBinding,
                                clear_provider_role_attribute_type_cache,
                                get_provider_role_attribute_type)
from .provider_management import ProviderManagementService
from .role_graph import RoleGraph

__all__ = [
    "ProviderManagementService",
    "ProviderRoleBinding",
    "RoleGraph",
    "clear_provider_role_attribute_type_cache",
    "get_provider_role_attribute_type",
]
