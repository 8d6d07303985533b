# backend/app/routers/__init__.py
"""
Router modules for API endpoints
"""

from . import auth
from . import portfolio

__all__ = [
    "auth",
    "portfolio",
]
