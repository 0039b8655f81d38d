"""
Contracts component - Distributor contracts.
"""

from ._impl import DistributorContractService

__all__ = ["DistributorContractService"]
