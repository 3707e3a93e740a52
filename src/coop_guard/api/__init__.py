"""ASGI integration for safehttp interceptors.

Structure:
    middleware.py - InterceptorMiddleware and the interceptor_configs decorator
"""

from coop_guard.api.middleware import (
    INTERCEPTOR_CONFIGS_ATTR,
    InterceptorMiddleware,
    interceptor_configs,
    resolve_handler_configs,
)

__all__ = [
    "INTERCEPTOR_CONFIGS_ATTR",
    "InterceptorMiddleware",
    "interceptor_configs",
    "resolve_handler_configs",
]
