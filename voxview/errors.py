"""
Decoder Errors
==============

Exception hierarchy raised while decoding voxel scene files.

All format errors derive from ``VoxelFormatError`` (itself a ``ValueError``),
so callers that only care about "this file could not be decoded" can catch
that single type, while tests and diagnostics can tell the individual
failure kinds apart.
"""

from typing import List, Optional


class VoxelFormatError(ValueError):
    """Base class for every scene decoding failure."""


# ---------------------------------------------------------------------------
# Text (.vly) grammar
# ---------------------------------------------------------------------------

class InvalidTextFormat(VoxelFormatError):
    """The input is not a valid VLY text scene."""


class UnexpectedToken(InvalidTextFormat):
    """A token did not match what the text grammar expected at this point."""

    def __init__(self, expected: str, found: Optional[str], offset: int):
        self.expected = expected
        self.found = found
        self.offset = offset
        shown = repr(found) if found is not None else 'end of input'
        super().__init__(
            f"Invalid vly format: expected {expected} at offset {offset}, got {shown}"
        )


# ---------------------------------------------------------------------------
# Binary (.vox) grammar
# ---------------------------------------------------------------------------

class InvalidBinaryFormat(VoxelFormatError):
    """The input is not a valid MagicaVoxel VOX archive."""


class TruncatedInput(InvalidBinaryFormat):
    """A declared length runs past the end of the available bytes."""

    def __init__(self, wanted: int, available: int, offset: int):
        self.wanted = wanted
        self.available = available
        self.offset = offset
        super().__init__(
            f"Truncated VOX data: need {wanted} bytes at offset {offset}, "
            f"only {available} left"
        )


class InvalidMagic(InvalidBinaryFormat):
    """The file does not start with the ``VOX `` magic bytes."""

    def __init__(self, magic: bytes):
        self.magic = magic
        super().__init__(f"Invalid VOX file: expected b'VOX ', got {magic!r}")


class UnsupportedVersion(InvalidBinaryFormat):
    """The archive declares a version other than the supported one."""

    def __init__(self, version: int, supported: int):
        self.version = version
        self.supported = supported
        super().__init__(
            f"Unsupported VOX version {version} (only {supported} is supported)"
        )


class UnexpectedChunkTag(InvalidBinaryFormat):
    """A chunk with the wrong tag was found where a specific one is required."""

    def __init__(self, expected: bytes, found: bytes, offset: int):
        self.expected = expected
        self.found = found
        self.offset = offset
        super().__init__(
            f"Expected {expected!r} chunk at offset {offset}, got {found!r}"
        )


class NonEmptyLeafChunk(InvalidBinaryFormat):
    """A chunk that cannot have sub-chunks declares a children region."""

    def __init__(self, chunk_id: bytes, children_size: int):
        self.chunk_id = chunk_id
        self.children_size = children_size
        super().__init__(
            f"Chunk {chunk_id!r} must not have children "
            f"(declares {children_size} bytes)"
        )


class ResidualContent(InvalidBinaryFormat):
    """A chunk's content holds bytes its layout does not account for."""

    def __init__(self, chunk_id: bytes, residual: int):
        self.chunk_id = chunk_id
        self.residual = residual
        super().__init__(
            f"Chunk {chunk_id!r} has {residual} unexpected trailing content bytes"
        )


class EmptyPack(InvalidBinaryFormat):
    """The archive declares no models."""

    def __init__(self, message: str = "VOX file contains no models"):
        super().__init__(message)


# ---------------------------------------------------------------------------
# Dispatch and collaborators
# ---------------------------------------------------------------------------

class UnknownFormat(VoxelFormatError):
    """No grammar could decode the input.

    The individual failures are kept in ``errors`` (in attempt order) for
    diagnostics only; they are not part of the message.
    """

    def __init__(self, errors: Optional[List[VoxelFormatError]] = None):
        self.errors = list(errors or [])
        super().__init__("Cannot determine the format of the model file")


class InputTooLarge(VoxelFormatError):
    """The input exceeds the caller's size limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Input is {size} bytes, limit is {limit} bytes")


class PaletteIndexError(IndexError):
    """A voxel references a color index outside of the scene palette."""

    def __init__(self, index: int, palette_size: int):
        self.index = index
        self.palette_size = palette_size
        super().__init__(
            f"Color index {index} is out of range for a palette of {palette_size} colors"
        )
