"""Application-wide constants for coop-guard.

For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Wire contract
    "COOP_HEADER",
    "COOP_REPORT_ONLY_HEADER",
    "REPORT_TO_DIRECTIVE",
    # Logging
    "SYSTEM_LOG_FILENAME",
]

APP_NAME = "coop-guard"

# Response headers owned by the COOP interceptor
COOP_HEADER = "Cross-Origin-Opener-Policy"
COOP_REPORT_ONLY_HEADER = "Cross-Origin-Opener-Policy-Report-Only"

# Directive parameter naming a Reporting API group
REPORT_TO_DIRECTIVE = "report-to"

SYSTEM_LOG_FILENAME = "system.jsonl"
