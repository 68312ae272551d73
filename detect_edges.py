#!/usr/bin/env python3
"""
edgelink - Entry Point

Run this file directly or use: python -m edgelink.main

Usage:
    python detect_edges.py --help
    python detect_edges.py photo.png --output-dir edges/
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from edgelink.main import main

if __name__ == "__main__":
    sys.exit(main())
