"""coop-guard: Cross-Origin-Opener-Policy interceptor for safehttp pipelines."""

__version__ = "0.1.0"
