"""
Service configuration.

Settings are plain module attributes read from the environment, so callers
do ``from config import settings`` and read ``settings.DATABASE_URL``.
"""

from . import settings

__all__ = ["settings"]
