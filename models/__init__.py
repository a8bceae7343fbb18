"""
Database models package.

This package contains all the database models for the application.
All models are imported here to provide a clean API for importing elsewhere.
"""

from .user import User
from .content import Content
from .share_link import ShareLink

# Define __all__ to explicitly state what's available when importing from models
__all__ = ["User", "Content", "ShareLink"]
