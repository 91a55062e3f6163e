# Common utilities and shared modules
"""
Shared components used by the tag engine:
- Project configuration (Pydantic settings)
- Logging configuration
"""

from .config import PROJECT_ROOT, RankingConfig, Settings
from .logging import setup_logging

__all__ = [
    "PROJECT_ROOT",
    "RankingConfig",
    "Settings",
    "setup_logging",
]
