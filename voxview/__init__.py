"""
VoxView - Voxel Scene Decoder
=============================

Decodes voxel model files into a single scene description:
- VLY (.vly) whitespace-delimited voxel lists
- MagicaVoxel (.vox) chunked binary archives

Version: 1.0.0
"""

__version__ = "1.0.0"
__license__ = "MIT"

from voxview.core.palette import Color
from voxview.core.scene import Scene, Voxel
from voxview.formats import load_file, parse_scene

__all__ = ['Color', 'Scene', 'Voxel', 'load_file', 'parse_scene', '__version__']
