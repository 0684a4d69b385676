"""Services layer - Application orchestration.

Available services:
- MetroRouterService: Routes between addresses on the metro network
"""

from .metro_router import MetroRouterService

__all__ = ["MetroRouterService"]
