"""
Logging components.
"""

from hisendesk.storage.logger import setup_logging

__all__ = [
    "setup_logging",
]
