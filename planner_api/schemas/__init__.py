### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - API Schemas Package -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Schemas Package

Contains Pydantic models for request/response validation.
"""

from .responses import (
    APIResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    PaginatedResponse,
    PaginationMeta,
)

__all__ = [
    "APIResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "PaginatedResponse",
    "PaginationMeta",
]
