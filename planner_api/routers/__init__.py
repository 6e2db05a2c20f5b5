### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - API Routers Package -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Routers Package

Contains endpoint routers for different resources:
- auth: Login, logout and account endpoints
- stageplanner: Stage planner events and technical teams
"""

from .auth import router as auth_router
from .stageplanner import router as stageplanner_router

__all__ = ["auth_router", "stageplanner_router"]
