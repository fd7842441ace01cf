"""
Entry point for the ``netutil`` console script and ``python -m netutil``.
"""

import sys

from loguru import logger

from netutil.cli.main import app


def main():
    """Run the CLI. Ctrl+C exits 0; anything unexpected is logged and exits 1."""
    try:
        app(prog_name="netutil")
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"netutil: unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
