"""Version information for Hisen Desk."""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)

# Release information
__author__ = "Hisen Desk Team"
__author_email__ = "team@hisendesk.dev"
__license__ = "MIT"
__url__ = "https://github.com/hisen-desk/hisen-desk"
__description__ = "Desktop diagnostics: system info, audio/camera devices and a quick network test"
