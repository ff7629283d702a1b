"""
Entry point for the Hisen Desk CLI application.
"""

import sys

from loguru import logger

from hisendesk.cli.main import app


def main():
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        print("\n\n👋 Cancelled by user. Goodbye!")
        sys.exit(0)
    except Exception as e:
        logger.exception("Unhandled error")
        print(f"\n❌ Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
