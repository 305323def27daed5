"""
Presentation services.
"""

from app.services import formatting

__all__ = ["formatting"]
