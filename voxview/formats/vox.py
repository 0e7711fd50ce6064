"""
MagicaVoxel .vox File Format Handler
====================================

Reader for MagicaVoxel VOX archives (version 150).

VOX File Format Specification:
- VOX files use little-endian byte order
- File starts with 'VOX ' magic number and version
- Every chunk is framed as: 4-byte id, content size, children size,
  content bytes, then the children region holding nested chunks
- The MAIN chunk holds an optional PACK chunk, one SIZE + XYZI pair per
  model, and an optional RGBA palette
- Voxel positions and sizes are written X, Z, Y (Z up) and stored X, Y, Z

Only the first model of a multi-model archive forms the scene; the others
are still parsed so the cursor stays aligned. ``parse_vox_models`` returns
all of them.
"""

import struct
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from voxview.core.palette import Color, default_palette, palette_from_rgba
from voxview.core.scene import Scene, Vec3, Voxel, assemble_scene, swap_axes
from voxview.errors import (
    EmptyPack,
    InvalidMagic,
    NonEmptyLeafChunk,
    ResidualContent,
    TruncatedInput,
    UnexpectedChunkTag,
    UnsupportedVersion,
)


BytesLike = Union[bytes, bytearray, memoryview]


class ByteCursor:
    """
    Forward-only reader over a byte region.

    Every read checks the remaining length first and raises ``TruncatedInput``
    instead of returning short data. ``base`` is the absolute file offset of
    the region, used for error messages.
    """

    def __init__(self, data: BytesLike, base: int = 0):
        self.data = memoryview(data)
        self.base = base
        self.offset = 0

    @property
    def position(self) -> int:
        """Absolute offset of the next unread byte."""
        return self.base + self.offset

    def remaining(self) -> int:
        return len(self.data) - self.offset

    def at_end(self) -> bool:
        return self.offset >= len(self.data)

    def peek_bytes(self, n: int) -> bytes:
        """Return up to n upcoming bytes without consuming them."""
        return bytes(self.data[self.offset:self.offset + n])

    def _take(self, n: int) -> memoryview:
        if n > self.remaining():
            raise TruncatedInput(n, self.remaining(), self.position)
        view = self.data[self.offset:self.offset + n]
        self.offset += n
        return view

    def read_bytes(self, n: int) -> bytes:
        return bytes(self._take(n))

    def read_uint32(self) -> int:
        """Read a little-endian unsigned 32-bit integer."""
        return struct.unpack('<I', self._take(4))[0]

    def sub_cursor(self, n: int) -> 'ByteCursor':
        """Consume n bytes and return a cursor restricted to them."""
        base = self.position
        return ByteCursor(self._take(n), base=base)


@dataclass
class VoxChunk:
    """A framed chunk with cursors over its content and children regions."""
    id: bytes
    content: ByteCursor
    children: ByteCursor


@dataclass
class VoxHeader:
    version: int


@dataclass
class VoxModel:
    """A single model (SIZE + XYZI pair) within a VOX file."""
    size: Vec3
    voxels: List[Voxel]


class VoxFormat:
    """
    MagicaVoxel .vox file format reader.

    Parsing is a small recursive descent over the chunk tree. Each failure
    raises a distinct ``InvalidBinaryFormat`` subclass.
    """

    MAGIC = b'VOX '
    VERSION = 150

    MAIN = b'MAIN'
    PACK = b'PACK'
    SIZE = b'SIZE'
    XYZI = b'XYZI'
    RGBA = b'RGBA'

    # Chunks that must not declare any children
    LEAF_CHUNKS = (PACK, SIZE, XYZI, RGBA)

    @classmethod
    def parse(cls, data: BytesLike) -> Scene:
        """
        Parse a VOX archive and return the scene of its first model.

        Args:
            data: Complete file contents

        Returns:
            Scene with a 256-color palette
        """
        return cls.parse_models(data)[0]

    @classmethod
    def parse_models(cls, data: BytesLike) -> List[Scene]:
        """
        Parse a VOX archive and return one scene per model.

        All scenes share the archive's palette.
        """
        cursor = ByteCursor(data)
        cls._read_header(cursor)

        main = cls._read_chunk(cursor, cls.MAIN)
        models, palette = cls._parse_main(main)

        return [assemble_scene(model.voxels, palette, model.size) for model in models]

    @classmethod
    def _read_header(cls, cursor: ByteCursor) -> VoxHeader:
        magic = cursor.read_bytes(len(cls.MAGIC))
        if magic != cls.MAGIC:
            raise InvalidMagic(magic)

        version = cursor.read_uint32()
        if version != cls.VERSION:
            raise UnsupportedVersion(version, cls.VERSION)

        return VoxHeader(version=version)

    @classmethod
    def _read_chunk(cls, cursor: ByteCursor, expected: Optional[bytes] = None) -> VoxChunk:
        """
        Read one framed chunk.

        Args:
            cursor: Cursor positioned at the chunk id
            expected: Required chunk id, or None to accept any

        Returns:
            VoxChunk whose content and children are their own cursors
        """
        offset = cursor.position
        chunk_id = cursor.read_bytes(4)
        if expected is not None and chunk_id != expected:
            raise UnexpectedChunkTag(expected, chunk_id, offset)

        content_size = cursor.read_uint32()
        children_size = cursor.read_uint32()
        if children_size and chunk_id in cls.LEAF_CHUNKS:
            raise NonEmptyLeafChunk(chunk_id, children_size)

        content = cursor.sub_cursor(content_size)
        children = cursor.sub_cursor(children_size)

        return VoxChunk(id=chunk_id, content=content, children=children)

    @classmethod
    def _skip_chunk(cls, cursor: ByteCursor):
        """Consume a chunk of any kind, checking the framing of its subtree."""
        pending = [cls._read_chunk(cursor).children]
        while pending:
            region = pending[-1]
            if region.at_end():
                pending.pop()
                continue
            pending.append(cls._read_chunk(region).children)

    @classmethod
    def _parse_main(cls, main: VoxChunk) -> Tuple[List[VoxModel], Tuple[Color, ...]]:
        if not main.content.at_end():
            raise ResidualContent(cls.MAIN, main.content.remaining())

        children = main.children
        if children.at_end():
            raise EmptyPack("MAIN chunk has no children")

        num_models = 1
        if children.peek_bytes(4) == cls.PACK:
            pack = cls._read_chunk(children, cls.PACK)
            num_models = pack.content.read_uint32()
            if num_models == 0:
                raise EmptyPack("PACK chunk declares zero models")

        models = [cls._read_model(children) for _ in range(num_models)]

        if children.peek_bytes(4) == cls.RGBA:
            chunk = cls._read_chunk(children, cls.RGBA)
            palette = palette_from_rgba(chunk.content.read_bytes(chunk.content.remaining()))
        else:
            palette = default_palette()

        # Extension chunks (materials, scene graph, ...) carry nothing we keep
        while not children.at_end():
            cls._skip_chunk(children)

        return models, palette

    @classmethod
    def _read_model(cls, cursor: ByteCursor) -> VoxModel:
        size_chunk = cls._read_chunk(cursor, cls.SIZE)
        size = cls._read_vec3(size_chunk.content)
        if not size_chunk.content.at_end():
            raise ResidualContent(cls.SIZE, size_chunk.content.remaining())

        xyzi_chunk = cls._read_chunk(cursor, cls.XYZI)
        num_voxels = xyzi_chunk.content.read_uint32()
        records = xyzi_chunk.content.read_bytes(num_voxels * 4)

        voxels = [
            Voxel(pos=swap_axes(x, z, y), color=color_index)
            for x, z, y, color_index in struct.iter_unpack('<BBBB', records)
        ]

        return VoxModel(size=size, voxels=voxels)

    @staticmethod
    def _read_vec3(cursor: ByteCursor) -> Vec3:
        x = cursor.read_uint32()
        z = cursor.read_uint32()
        y = cursor.read_uint32()
        return swap_axes(x, z, y)


def parse_vox(data: BytesLike) -> Scene:
    """Parse a VOX archive, keeping only its first model."""
    return VoxFormat.parse(data)


def parse_vox_models(data: BytesLike) -> List[Scene]:
    """Parse a VOX archive, returning every model as its own scene."""
    return VoxFormat.parse_models(data)
