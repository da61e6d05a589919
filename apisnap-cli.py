#!/usr/bin/env python3
"""
apisnap - API response capture and regression diff

This is a convenience wrapper that calls the packaged implementation.
The actual implementation is in src/apisnap/cli.py

Usage:
    python apisnap-cli.py capture before
    python apisnap-cli.py capture after
    python apisnap-cli.py compare
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from apisnap.cli import main

if __name__ == '__main__':
    main()
