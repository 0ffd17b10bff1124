"""
Space Content Service Clients

Clients for the external APIs this service reads from.
"""

from .target_client import ResourceKind, TargetClient

__all__ = ["ResourceKind", "TargetClient"]
