"""Development entrypoint for the hexhop command line driver."""

from __future__ import annotations

import sys

from hexhop.cli import main

if __name__ == "__main__":
    sys.exit(main())
