"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .vatsim_client import VatsimActivityFeed, callsign_in_facility

__all__ = ['VatsimActivityFeed', 'callsign_in_facility']
