"""Cross-Origin-Opener-Policy protection.

Structure:
    policy.py      - Mode enum and Policy model (directive serialization)
    interceptor.py - Interceptor, Overrider and their factories

coop.Interceptor is the concrete COOP interceptor. It satisfies, and shares its
name with, the structural protocol coop_guard.safehttp.Interceptor; import the
protocol under an alias (e.g. InterceptorProtocol) when both are needed.

Specification: https://html.spec.whatwg.org/#cross-origin-opener-policies
"""

from coop_guard.coop.interceptor import (
    Interceptor,
    Overrider,
    create_default_interceptor,
    create_interceptor,
    create_override,
)
from coop_guard.coop.policy import Mode, Policy

__all__ = [
    # Policy models
    "Mode",
    "Policy",
    # Interceptor
    "Interceptor",
    "Overrider",
    "create_default_interceptor",
    "create_interceptor",
    "create_override",
]
