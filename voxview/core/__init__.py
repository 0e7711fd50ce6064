"""
VoxView Core Module
===================

Scene data model and palette handling shared by every decoder.
"""

from voxview.core.palette import Color, default_palette, palette_from_rgba
from voxview.core.scene import Scene, Voxel, assemble_scene

__all__ = ['Color', 'Scene', 'Voxel', 'assemble_scene', 'default_palette', 'palette_from_rgba']
