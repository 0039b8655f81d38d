"""
Terms templates component - Parameterized terms and conditions templates.
"""

from ._impl import TemplateService

__all__ = ["TemplateService"]
