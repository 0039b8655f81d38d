"""
Territories component - Authorized territories and operating regions.
"""

from ._impl import OperationService, TerritoryService

__all__ = ["TerritoryService", "OperationService"]
