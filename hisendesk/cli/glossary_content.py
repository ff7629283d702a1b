"""
Glossary content for `hisendesk glossary [term]`.
Each entry: (display_name, definition_text).
"""

GLOSSARY: dict[str, tuple[str, str]] = {
    "external ip": (
        "External IP",
        "The address by which your machine is seen from outside its local network, "
        "as reported by a third-party echo service. Behind a home router this is the router's public address.",
    ),
    "latency": (
        "Latency",
        "The time a request takes to reach a server and for the answer to come back. "
        "Hisen Desk measures it with one HTTP request, in milliseconds (ms).\n\n"
        "Rough guide: <100ms feels instant, 100–300ms is normal, >300ms feels sluggish.",
    ),
    "throughput probe": (
        "Throughput Probe",
        "A timed download of a fixed-size file (about 3 MB) used to approximate available bandwidth. "
        "It is sensitive to server load and network path, so the figure is a reference, not a calibrated measurement.",
    ),
    "mbps": (
        "Mbps (Megabits per second)",
        "Transfer rate in millions of bits per second. Divide by 8 for megabytes per second.",
    ),
    "default device": (
        "Default Device",
        "The audio device the operating system currently uses for input (microphone) or output (speakers). "
        "It can change between two listings, e.g. when a headset is plugged in.",
    ),
    "swap": (
        "Swap",
        "Disk space the operating system uses as overflow when physical memory is full. "
        "Heavy swap use usually means the machine needs more memory.",
    ),
    "uptime": (
        "Uptime",
        "Time since the operating system was last started.",
    ),
    "icmp": (
        "ICMP (Internet Control Message Protocol)",
        "Protocol used by ping. Sending it needs elevated privileges on most systems, "
        "which is why Hisen Desk measures latency over HTTP instead.",
    ),
}


def get_glossary_entry(term: str) -> tuple[str, str] | None:
    """Return (display_name, definition) for a term, or None. Matching is case-insensitive and by key."""
    key = term.strip().lower()
    if key in GLOSSARY:
        return GLOSSARY[key]
    # Allow partial key match (e.g. "throughput" -> "throughput probe")
    for k, v in GLOSSARY.items():
        if key in k or k.startswith(key):
            return v
    return None


def list_glossary_terms() -> list[str]:
    """Return sorted list of glossary keys (terms)."""
    return sorted(GLOSSARY.keys())
