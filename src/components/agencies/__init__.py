"""
Agencies component - Agencies, agents, roles and agent assignments.
"""

from ._impl import AgencyService, AgentAgencyService, AgentRoleService, AgentService

__all__ = [
    "AgencyService",
    "AgentService",
    "AgentRoleService",
    "AgentAgencyService",
]
