"""
REST API layer for capplane.

A FastAPI application factory whose endpoints delegate to the operations
layer (``capplane.ops``). This package handles only HTTP transport
concerns: serialisation, error mapping and request context.

Quick start::

    from capplane.api import create_app

    app = create_app()  # ready for uvicorn
"""

from capplane.api.app import create_app

__all__ = ["create_app"]
