"""
Abelian SDK Network Clients
"""

from abelsdk.network.rpc import AbecRPCClient

__all__ = ["AbecRPCClient"]
