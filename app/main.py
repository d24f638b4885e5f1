#!/usr/bin/env python3
"""
cbx-safe-shell - Entry Point

Runs the command line interface without installing the package.
"""

import sys
from pathlib import Path

# Add app directory to path for imports when running directly
APP_DIR = Path(__file__).parent
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

from cbx_safe_shell.cli import main


if __name__ == "__main__":
    sys.exit(main())
