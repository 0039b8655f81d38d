"""
Distributor terms component - Terms and conditions documents.
"""

from ._impl import DistributorTermsService
from .ports import DistributorTermsRepoPort

__all__ = ["DistributorTermsService", "DistributorTermsRepoPort"]
