### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Request Logging Middleware -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Request Logging Middleware

Logs all API requests with attribution information:
- Who: tenant header, masked bearer token, client IP
- What: Endpoint, method, parameters
- Result: Status code, response time
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from planner_api.config import get_api_settings
from planner_api.utils import setup_logger

# Set up API request logger
api_logger = setup_logger("planner_api.requests", log_to_console=False)


def mask_bearer(authorization: str | None) -> str:
    """Show only the first characters of a bearer token"""
    if not authorization:
        return "none"
    _, _, token = authorization.partition(" ")
    token = token.strip() or authorization
    return token[:8] + "..." if len(token) > 8 else "***"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging all API requests

    Captures:
    - Request ID (8-char UUID prefix, echoed as X-Request-ID)
    - Method, path and query
    - Tenant header and masked bearer token
    - Client IP
    - Response status and time
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Generate request ID
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        method = request.method
        path = request.url.path
        query = str(request.url.query) if request.url.query else ""
        client_ip = request.client.host if request.client else "unknown"
        tenant = request.headers.get(get_api_settings().tenant_header, "-")
        masked_token = mask_bearer(request.headers.get("Authorization"))

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            api_logger.error(f"[{request_id}] ERROR {method} {path} - {e!s}")
            raise

        response_time = (time.time() - start_time) * 1000  # ms

        log_entry = (
            f"[{request_id}] "
            f"{method} {path}"
            f"{f'?{query}' if query else ''} "
            f"| tenant={tenant} "
            f"| token={masked_token} "
            f"| ip={client_ip} "
            f"| status={status_code} "
            f"| time={response_time:.2f}ms"
        )

        # Log at appropriate level
        if status_code >= 500:
            api_logger.error(log_entry)
        elif status_code >= 400:
            api_logger.warning(log_entry)
        else:
            api_logger.info(log_entry)

        response.headers["X-Request-ID"] = request_id

        return response
