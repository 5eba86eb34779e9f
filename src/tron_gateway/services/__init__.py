"""
Gateway services
"""

from tron_gateway.services.token_transfer import TokenTransferService

__all__ = ["TokenTransferService"]
