"""
Network measurement modules.
"""

from hisendesk.modules.base import BaseProbe, ProbeFailure, ProbeOutcome, ProbeSuccess
from hisendesk.modules.network_test import (
    DownloadProbe,
    ExternalIPProbe,
    LatencyProbe,
    NetTestResult,
    NetworkProber,
    ProbeEndpoints,
    UploadProbe,
    run_network_test,
)

__all__ = [
    "BaseProbe",
    "ProbeFailure",
    "ProbeOutcome",
    "ProbeSuccess",
    "DownloadProbe",
    "ExternalIPProbe",
    "LatencyProbe",
    "NetTestResult",
    "NetworkProber",
    "ProbeEndpoints",
    "UploadProbe",
    "run_network_test",
]
