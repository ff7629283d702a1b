"""
Hisen Desk - Desktop Diagnostics Tool
"""

from hisendesk.__version__ import __version__
from hisendesk.core.system_info import get_system_info
from hisendesk.devices import list_audio_devices, list_cameras
from hisendesk.modules.network_test import run_network_test

__all__ = [
    "get_system_info",
    "list_audio_devices",
    "list_cameras",
    "run_network_test",
    "__version__",
]
