"""
Configurations component - Scopes, data types and distributor settings.
"""

from ._impl import (
    ConfigurationDataTypeService,
    ConfigurationScopeService,
    DistributorConfigurationService,
)

__all__ = [
    "ConfigurationScopeService",
    "ConfigurationDataTypeService",
    "DistributorConfigurationService",
]
