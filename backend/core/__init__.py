"""Core backend infrastructure for the winner engine service.

This package contains configuration, logging, database, and dependency helpers
used by the FastAPI application entrypoint.
"""
