#!/usr/bin/env python3
"""
VoxView - Voxel Scene Decoder
=============================

Main entry point for running VoxView from a source checkout.

Usage:
    python main.py [options] file

Arguments:
    file    Voxel model file to decode (.vly or .vox)
"""

import sys
from pathlib import Path

# Add the project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from voxview.cli import main


if __name__ == "__main__":
    sys.exit(main())
