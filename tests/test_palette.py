import struct

import pytest

from voxview.core.palette import (
    DEFAULT_PALETTE,
    Color,
    default_palette,
    palette_from_rgba,
)
from voxview.errors import ResidualContent, TruncatedInput


def test_color_from_packed_is_little_endian():
    assert Color.from_packed(0xff336699) == Color(0x99, 0x66, 0x33)


def test_color_conversions():
    color = Color(255, 0, 51)
    assert color.to_rgb() == (255, 0, 51)
    assert color.to_hex() == '#ff0033'
    assert color.to_float() == pytest.approx((1.0, 0.0, 0.2))


def test_default_table_shape():
    assert len(DEFAULT_PALETTE) == 256
    assert DEFAULT_PALETTE[0] == 0


def test_default_palette():
    palette = default_palette()

    assert len(palette) == 256
    assert palette[0] == Color(0, 0, 0)
    assert palette[1] == Color(255, 255, 255)
    assert palette[2] == Color(255, 255, 204)
    assert palette[255] == Color(17, 17, 17)


def test_default_palette_is_memoized():
    assert default_palette() is default_palette()


def test_rgba_and_default_paths_agree():
    # Re-encoding the default table as RGBA content must decode identically
    content = b''.join(struct.pack('<I', value) for value in DEFAULT_PALETTE[1:])
    content += b'\x00' * 4
    assert palette_from_rgba(content) == default_palette()


def test_rgba_drops_alpha_and_last_entry():
    content = bytes((1, 2, 3, 4)) * 255 + bytes((9, 9, 9, 9))
    palette = palette_from_rgba(content)

    assert len(palette) == 256
    assert palette[0] == Color(0, 0, 0)
    assert set(palette[1:]) == {Color(1, 2, 3)}


@pytest.mark.parametrize("size, error", [
    (0, TruncatedInput),
    (1023, TruncatedInput),
    (1028, ResidualContent),
])
def test_rgba_must_hold_256_entries(size, error):
    with pytest.raises(error):
        palette_from_rgba(b'\x00' * size)
