"""Core settings, constants and metrics."""
