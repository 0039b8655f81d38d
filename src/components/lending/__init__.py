"""
Lending component - Lending types, configurations and contracts.
"""

from ._impl import LendingConfigurationService, LendingContractService, LendingTypeService
from .ports import LendingConfigurationRepoPort

__all__ = [
    "LendingTypeService",
    "LendingConfigurationService",
    "LendingContractService",
    "LendingConfigurationRepoPort",
]
