### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - API Package -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Planner Suite API Package

This package contains the FastAPI application that serves the
multi-tenant planning modules (stage, bar, security, ...) behind
tenant-scoped authentication and authorization.
"""

__version__ = "1.0.0"
