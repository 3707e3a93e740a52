"""Telemetry for coop-guard.

Structure:
    system/ - System logger for operational events
"""
