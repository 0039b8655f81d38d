"""
Distributors component - Distributors, their branding and audit trail.
"""

from ._impl import AuditLogService, BrandingService, DistributorService

__all__ = [
    "DistributorService",
    "BrandingService",
    "AuditLogService",
]
