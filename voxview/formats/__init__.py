"""
VoxView Formats Module
======================

Scene decoders for the supported voxel formats, and the dispatcher that
picks one from a file name.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from voxview.core.scene import Scene
from voxview.errors import InputTooLarge, UnknownFormat, VoxelFormatError
from voxview.formats.vly import VlyFormat, parse_vly
from voxview.formats.vox import VoxFormat, parse_vox, parse_vox_models

logger = logging.getLogger(__name__)


class FormatManager:
    """
    Centralized scene format dispatcher.

    A recognized extension selects exactly one grammar. Without a file name,
    or with an unknown extension, every grammar is tried in ``FALLBACK_ORDER``
    and the first success wins.
    """

    # Supported formats, keyed by case-sensitive extension
    FORMATS = {
        'vly': ('VLY voxel list', VlyFormat),
        'vox': ('MagicaVoxel', VoxFormat),
    }

    FALLBACK_ORDER = ('vly', 'vox')

    @staticmethod
    def extension_of(filename: Optional[str]) -> Optional[str]:
        """Get the text after the last '.' of a file name, if any."""
        if not filename or '.' not in filename:
            return None
        return filename.rsplit('.', 1)[1]

    def can_import(self, filename: str) -> bool:
        """Check if a file name selects a known format."""
        return self.extension_of(filename) in self.FORMATS

    def describe_formats(self) -> str:
        """Get a human readable list of the supported formats."""
        return '\n'.join(f"  .{ext:<5} {name}" for ext, (name, _) in self.FORMATS.items())

    def parse(self, data: bytes, filename: Optional[str] = None) -> Scene:
        """
        Decode a scene from a complete file buffer.

        Args:
            data: File contents
            filename: Optional name used only for extension dispatch

        Returns:
            The decoded Scene

        Raises:
            VoxelFormatError: The selected grammar's error, or UnknownFormat
                when no extension matched and every grammar failed
        """
        return self.detect(data, filename)[1]

    def detect(self, data: bytes, filename: Optional[str] = None) -> Tuple[str, Scene]:
        """
        Decode a scene and report which format decoded it.

        Returns:
            Tuple of (format display name, Scene)
        """
        ext = self.extension_of(filename)

        if ext in self.FORMATS:
            name, handler = self.FORMATS[ext]
            logger.debug("Decoding %s as %s", filename, name)
            return name, handler.parse(data)

        errors: List[VoxelFormatError] = []
        for candidate in self.FALLBACK_ORDER:
            name, handler = self.FORMATS[candidate]
            try:
                scene = handler.parse(data)
            except VoxelFormatError as err:
                logger.debug("Not a %s file: %s", name, err)
                errors.append(err)
                continue
            logger.debug("Detected %s format", name)
            return name, scene

        raise UnknownFormat(errors)


_manager = FormatManager()


def parse_scene(data: bytes, filename: Optional[str] = None) -> Scene:
    """Decode a scene, dispatching on the file name's extension."""
    return _manager.parse(data, filename)


def detect_file(filepath: Union[str, Path], max_bytes: Optional[int] = None,
                force_format: Optional[str] = None) -> Tuple[str, Scene]:
    """
    Read a model file and decode it, reporting the format used.

    Args:
        filepath: Path to the model file
        max_bytes: Optional upper bound on the file size
        force_format: Extension forcing a grammar instead of the file's own name

    Returns:
        Tuple of (format display name, Scene)

    Raises:
        InputTooLarge: If the file exceeds max_bytes
        VoxelFormatError: If the contents cannot be decoded
        OSError: If the file cannot be read
    """
    path = Path(filepath)

    if max_bytes is not None:
        size = path.stat().st_size
        if size > max_bytes:
            raise InputTooLarge(size, max_bytes)

    data = path.read_bytes()
    logger.debug("Read %d bytes from %s", len(data), path)

    name = f"{path.name}.{force_format}" if force_format else path.name
    return _manager.detect(data, name)


def load_file(filepath: Union[str, Path], max_bytes: Optional[int] = None,
              force_format: Optional[str] = None) -> Scene:
    """Read a model file and decode it (see ``detect_file``)."""
    return detect_file(filepath, max_bytes=max_bytes, force_format=force_format)[1]


__all__ = [
    'FormatManager',
    'VlyFormat',
    'VoxFormat',
    'detect_file',
    'load_file',
    'parse_scene',
    'parse_vly',
    'parse_vox',
    'parse_vox_models',
]
