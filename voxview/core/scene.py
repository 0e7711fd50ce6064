"""
Scene - Unified Voxel Scene Description
=======================================

The immutable value every decoder produces: a list of colored voxel
positions, the palette they index into, and the grid size declared by the
source file. Uses numpy to hand positions and colors to renderers.
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterable, Tuple

from voxview.core.palette import Color
from voxview.errors import PaletteIndexError


Vec3 = Tuple[int, int, int]


def swap_axes(x: int, z: int, y: int) -> Vec3:
    """Convert an on-disk (X, Z, Y) triple to stored (X, Y, Z) order."""
    return (x, y, z)


@dataclass(frozen=True)
class Voxel:
    """A unit cube at a grid position, colored by a palette index."""
    pos: Vec3
    color: int


@dataclass(frozen=True)
class Scene:
    """
    Decoded voxel scene.

    Attributes:
        voxels: Voxels in file order
        palette: Colors addressed by ``Voxel.color``
        grid_size: Extent declared by the file (not necessarily tight)
    """
    voxels: Tuple[Voxel, ...]
    palette: Tuple[Color, ...]
    grid_size: Vec3

    def bounds(self) -> Vec3:
        """
        Get the tight extent of the voxels.

        Returns:
            Per-axis maximum position plus one, or (0, 0, 0) for an empty scene
        """
        if not self.voxels:
            return (0, 0, 0)
        return tuple(int(v) + 1 for v in self.positions_array().max(axis=0))

    def center(self) -> Tuple[float, float, float]:
        """Get the center of the declared grid."""
        return tuple(size / 2.0 for size in self.grid_size)

    def positions_array(self) -> np.ndarray:
        """Get voxel positions as an (N, 3) uint32 array."""
        if not self.voxels:
            return np.zeros((0, 3), dtype=np.uint32)
        return np.array([v.pos for v in self.voxels], dtype=np.uint32)

    def instance_colors(self) -> np.ndarray:
        """
        Get each voxel's palette color as normalized floats.

        Returns:
            (N, 3) float32 array in the 0-1 range

        Raises:
            PaletteIndexError: If a voxel references a color outside the palette
        """
        colors = np.zeros((len(self.voxels), 3), dtype=np.float32)
        for i, voxel in enumerate(self.voxels):
            if voxel.color >= len(self.palette):
                raise PaletteIndexError(voxel.color, len(self.palette))
            colors[i] = self.palette[voxel.color].to_float()
        return colors


def assemble_scene(voxels: Iterable[Voxel], palette: Iterable[Color],
                   grid_size: Vec3) -> Scene:
    """
    Combine parsed geometry and a resolved palette into a Scene.

    No cross-validation between voxel color indices and the palette length is
    done here; that is up to whoever consumes the scene.
    """
    return Scene(
        voxels=tuple(voxels),
        palette=tuple(palette),
        grid_size=tuple(grid_size),
    )
