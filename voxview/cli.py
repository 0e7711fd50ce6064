"""
VoxView - Command Line Inspector
================================

Decodes a voxel model file and prints a summary of the resulting scene.

Usage:
    voxview [options] file

Arguments:
    file    Voxel model file to decode (.vly or .vox)
"""

import argparse
import logging
import sys
from typing import List, Optional

from voxview import __version__
from voxview.core.scene import Scene
from voxview.errors import VoxelFormatError
from voxview.formats import FormatManager, detect_file

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 64 * 1024 * 1024


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    manager = FormatManager()

    parser = argparse.ArgumentParser(
        prog='voxview',
        description='VoxView - Voxel Scene Decoder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Supported formats:
{manager.describe_formats()}

Files with any other extension are probed as VLY first, then VOX.

Examples:
  %(prog)s model.vox           Summarize a MagicaVoxel file
  %(prog)s --voxels scene.vly  Also list every voxel
        """
    )

    parser.add_argument(
        'file',
        help='Voxel file to decode'
    )

    parser.add_argument(
        '--format',
        choices=sorted(manager.FORMATS),
        help='Decode with this format regardless of the file extension'
    )

    parser.add_argument(
        '--max-bytes',
        type=int,
        default=DEFAULT_MAX_BYTES,
        help=f'Refuse files larger than this (default: {DEFAULT_MAX_BYTES}, 0 disables)'
    )

    parser.add_argument(
        '--voxels',
        action='store_true',
        help='List every voxel'
    )

    parser.add_argument(
        '--palette',
        action='store_true',
        help='List every palette color'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )


def print_scene(scene: Scene, format_name: str, show_voxels: bool = False,
                show_palette: bool = False):
    """Print a summary of a decoded scene."""
    print(f"Format:    {format_name}")
    print(f"Voxels:    {len(scene.voxels)}")
    print(f"Grid size: {'x'.join(str(v) for v in scene.grid_size)}")
    print(f"Bounds:    {'x'.join(str(v) for v in scene.bounds())}")
    print(f"Palette:   {len(scene.palette)} colors")

    if show_voxels:
        print()
        for voxel in scene.voxels:
            x, y, z = voxel.pos
            print(f"{x} {y} {z} {voxel.color}")

    if show_palette:
        print()
        for index, color in enumerate(scene.palette):
            print(f"{index:3d} {color.to_hex()}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)
    setup_logging(args.debug)

    max_bytes = args.max_bytes or None

    try:
        format_name, scene = detect_file(args.file, max_bytes=max_bytes,
                                         force_format=args.format)
    except FileNotFoundError:
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1
    except OSError as err:
        print(f"Error: Cannot read {args.file}: {err.strerror or err}", file=sys.stderr)
        return 1
    except VoxelFormatError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    logger.info("Loaded %s", args.file)
    print_scene(scene, format_name, show_voxels=args.voxels, show_palette=args.palette)

    if scene.bounds() != scene.grid_size:
        logger.debug("Tight bounds %s differ from declared grid size %s",
                     scene.bounds(), scene.grid_size)

    return 0


if __name__ == "__main__":
    sys.exit(main())
