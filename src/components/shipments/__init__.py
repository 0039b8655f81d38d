"""
Shipments component - Delivery tracking for lending contracts.
"""

from ._impl import ShipmentService, generate_tracking_number

__all__ = ["ShipmentService", "generate_tracking_number"]
