"""
VLY Text Format Handler
=======================

Reader for the whitespace-delimited VLY voxel list format:

    grid_size: <x> <z> <y>
    voxel_num: <n>
    <x> <z> <y> <color index>      (n times)
    <index> <r> <g> <b>            (any number of times)

Tokens may be separated by any run of whitespace, newlines included.
Positions and the grid size are written in X, Z, Y order on disk and stored
as X, Y, Z.

Color records are assumed to be listed in palette order starting at 0; their
leading index token is read and ignored.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Union

from voxview.core.palette import Color
from voxview.core.scene import Scene, Vec3, Voxel, assemble_scene, swap_axes
from voxview.errors import InvalidTextFormat, UnexpectedToken


U32_MAX = 0xFFFFFFFF
CHANNEL_MAX = 0xFF

_WHITESPACE = re.compile(r'\s*')
_INTEGER = re.compile(r'[0-9]+')
_TOKEN = re.compile(r'\S+')


class TextCursor:
    """Forward-only reader over a text buffer."""

    def __init__(self, text: str):
        self.text = text
        self.offset = 0

    def skip_whitespace(self):
        self.offset = _WHITESPACE.match(self.text, self.offset).end()

    def at_end(self) -> bool:
        self.skip_whitespace()
        return self.offset >= len(self.text)

    def peek_token(self) -> Optional[str]:
        """Return the next whitespace-delimited token without consuming it."""
        match = _TOKEN.match(self.text, self.offset)
        return match.group() if match else None

    def expect(self, keyword: str):
        """Consume a literal keyword."""
        self.skip_whitespace()
        if not self.text.startswith(keyword, self.offset):
            raise UnexpectedToken(repr(keyword), self.peek_token(), self.offset)
        self.offset += len(keyword)

    def read_int(self, maximum: int = U32_MAX) -> int:
        """
        Consume a non-negative decimal integer.

        Args:
            maximum: Largest accepted value

        Returns:
            The parsed integer

        Raises:
            UnexpectedToken: If the next token is not a number in range
        """
        self.skip_whitespace()
        match = _INTEGER.match(self.text, self.offset)
        if match is None:
            raise UnexpectedToken('an unsigned integer', self.peek_token(), self.offset)
        value = int(match.group())
        if value > maximum:
            raise UnexpectedToken(f'an integer up to {maximum}', match.group(), self.offset)
        self.offset = match.end()
        return value

    def read_vec3(self) -> Vec3:
        x, z, y = self.read_int(), self.read_int(), self.read_int()
        return swap_axes(x, z, y)


@dataclass
class VlyHeader:
    grid_size: Vec3
    voxel_num: int


class VlyFormat:
    """
    VLY text format reader.

    Every failure is reported as ``InvalidTextFormat`` (``UnexpectedToken``
    for grammar mismatches); no partial recovery is attempted.
    """

    GRID_SIZE_KEYWORD = 'grid_size:'
    VOXEL_NUM_KEYWORD = 'voxel_num:'

    @classmethod
    def parse(cls, data: Union[bytes, str]) -> Scene:
        """
        Parse a VLY scene.

        Args:
            data: UTF-8 encoded bytes or an already decoded string

        Returns:
            Scene with the declared voxels and the trailing colors as palette
        """
        if isinstance(data, (bytes, bytearray, memoryview)):
            try:
                text = bytes(data).decode('utf-8')
            except UnicodeDecodeError as err:
                raise InvalidTextFormat(f"Invalid vly format: not UTF-8 text ({err})") from err
        else:
            text = data

        cursor = TextCursor(text)
        header = cls._read_header(cursor)
        voxels = [cls._read_voxel(cursor) for _ in range(header.voxel_num)]
        colors = cls._read_colors(cursor)

        return assemble_scene(voxels, colors, header.grid_size)

    @classmethod
    def _read_header(cls, cursor: TextCursor) -> VlyHeader:
        cursor.expect(cls.GRID_SIZE_KEYWORD)
        grid_size = cursor.read_vec3()
        cursor.expect(cls.VOXEL_NUM_KEYWORD)
        voxel_num = cursor.read_int()
        return VlyHeader(grid_size=grid_size, voxel_num=voxel_num)

    @staticmethod
    def _read_voxel(cursor: TextCursor) -> Voxel:
        pos = cursor.read_vec3()
        color = cursor.read_int()
        return Voxel(pos=pos, color=color)

    @staticmethod
    def _read_colors(cursor: TextCursor) -> List[Color]:
        """Read color records until one fails to match or input runs out."""
        colors = []
        while not cursor.at_end():
            start = cursor.offset
            try:
                cursor.read_int()  # palette index, assumed sequential
                r = cursor.read_int(CHANNEL_MAX)
                g = cursor.read_int(CHANNEL_MAX)
                b = cursor.read_int(CHANNEL_MAX)
            except UnexpectedToken:
                cursor.offset = start
                break
            colors.append(Color(r=r, g=g, b=b))
        return colors


def parse_vly(data: Union[bytes, str]) -> Scene:
    """Parse a VLY text scene."""
    return VlyFormat.parse(data)
