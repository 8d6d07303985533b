# backend/app/services/__init__.py
"""Service modules for business logic"""

from . import accounts

__all__ = ["accounts"]
