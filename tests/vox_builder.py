"""Helpers assembling VOX archives byte by byte for tests."""

import struct


def u32(value):
    return struct.pack('<I', value)


def chunk(tag, content=b'', children=b''):
    return tag + u32(len(content)) + u32(len(children)) + content + children


def pack_chunk(num_models):
    return chunk(b'PACK', u32(num_models))


def size_chunk(x, z, y):
    """SIZE chunk in on-disk (X, Z, Y) order."""
    return chunk(b'SIZE', u32(x) + u32(z) + u32(y))


def xyzi_chunk(voxels):
    """XYZI chunk from on-disk (x, z, y, color index) records."""
    content = u32(len(voxels))
    for record in voxels:
        content += bytes(record)
    return chunk(b'XYZI', content)


def rgba_chunk(colors):
    """RGBA chunk from up to 256 (r, g, b, a) entries, zero padded."""
    content = b''.join(bytes(c) for c in colors)
    content += b'\x00' * (1024 - len(content))
    return chunk(b'RGBA', content)


def main_chunk(*children, content=b''):
    return chunk(b'MAIN', content, b''.join(children))


def vox_file(*children, version=150, magic=b'VOX '):
    return magic + u32(version) + main_chunk(*children)


def single_voxel_file():
    """One 1x1x1 model holding a single voxel of color 1, no palette."""
    return vox_file(size_chunk(1, 1, 1), xyzi_chunk([(0, 0, 0, 1)]))
