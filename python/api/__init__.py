"""
FastAPI Backend for QuickFlow

Provides REST API endpoints for the QuickFlow accounting frontend.
"""

from .main import app

__all__ = ["app"]
