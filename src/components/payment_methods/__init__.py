"""
Payment methods component - Agency disbursement instruments.
"""

from ._impl import PaymentMethodService
from .component import SetPrimaryInput, run_set_primary

__all__ = [
    # Entry points
    "run_set_primary",
    # Input models
    "SetPrimaryInput",
    # Service
    "PaymentMethodService",
]
