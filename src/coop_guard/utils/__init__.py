"""Shared utilities for coop-guard."""
