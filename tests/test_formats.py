import logging

import pytest

from vox_builder import chunk, single_voxel_file, size_chunk, vox_file, xyzi_chunk
from voxview.errors import (
    InputTooLarge,
    InvalidBinaryFormat,
    InvalidMagic,
    InvalidTextFormat,
    UnknownFormat,
    VoxelFormatError,
)
from voxview.formats import FormatManager, detect_file, load_file, parse_scene


VLY_TEXT = "grid_size: 2 3 4 voxel_num: 1\n0 1 2 5\n0 10 20 30\n"


@pytest.mark.parametrize("filename, expected", [
    ("model.vox", "vox"),
    ("dir/model.vly", "vly"),
    ("archive.tar.vox", "vox"),
    ("model.VOX", "VOX"),
    ("dir.vox/model", "vox/model"),
    ("model", None),
    ("", None),
    (None, None),
])
def test_extension_of(filename, expected):
    assert FormatManager.extension_of(filename) == expected


def test_can_import():
    manager = FormatManager()
    assert manager.can_import("a.vox")
    assert manager.can_import("a.vly")
    assert not manager.can_import("a.Vox")
    assert not manager.can_import("a.ply")


def test_describe_formats_lists_extensions():
    text = FormatManager().describe_formats()
    assert ".vly" in text
    assert ".vox" in text


def test_dispatch_by_extension():
    assert len(parse_scene(single_voxel_file(), "model.vox").palette) == 256
    assert parse_scene(VLY_TEXT.encode(), "model.vly").grid_size == (2, 4, 3)


def test_known_extension_does_not_fall_back():
    with pytest.raises(InvalidTextFormat):
        parse_scene(single_voxel_file(), "model.vly")
    with pytest.raises(InvalidMagic):
        parse_scene(VLY_TEXT.encode(), "model.vox")


def test_fallback_decodes_binary_with_unknown_extension():
    scene = parse_scene(single_voxel_file(), "scene.unknown")
    assert scene.voxels[0].pos == (0, 0, 0)
    assert scene.voxels[0].color == 1


def test_fallback_decodes_text_without_filename():
    scene = parse_scene(VLY_TEXT.encode())
    assert scene.voxels[0].pos == (0, 2, 1)
    assert scene.voxels[0].color == 5


def test_extension_match_is_case_sensitive():
    # '.VOX' is not recognized, so probing still finds the binary grammar
    scene = parse_scene(single_voxel_file(), "MODEL.VOX")
    assert len(scene.voxels) == 1


def test_unknown_format_keeps_attempt_errors():
    with pytest.raises(UnknownFormat) as exc_info:
        parse_scene(b"neither format", "model.bin")

    errors = exc_info.value.errors
    assert len(errors) == 2
    assert isinstance(errors[0], InvalidTextFormat)
    assert isinstance(errors[1], InvalidBinaryFormat)
    assert str(exc_info.value) == "Cannot determine the format of the model file"


def test_fallback_logs_attempts(caplog):
    with caplog.at_level(logging.DEBUG, logger="voxview.formats"):
        parse_scene(single_voxel_file())
    assert "Not a VLY voxel list file" in caplog.text
    assert "Detected MagicaVoxel format" in caplog.text


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_scene(b"")


def test_load_file(tmp_path):
    path = tmp_path / "scene.vox"
    path.write_bytes(single_voxel_file())

    scene = load_file(path)
    assert len(scene.voxels) == 1


def test_load_file_size_limit(tmp_path):
    path = tmp_path / "scene.vly"
    path.write_text(VLY_TEXT)

    with pytest.raises(InputTooLarge) as exc_info:
        load_file(path, max_bytes=10)
    assert exc_info.value.size == len(VLY_TEXT)

    assert load_file(path, max_bytes=len(VLY_TEXT)).grid_size == (2, 4, 3)


def test_load_file_forced_format(tmp_path):
    path = tmp_path / "scene.data"
    path.write_bytes(single_voxel_file())

    assert len(load_file(path, force_format="vox").voxels) == 1
    with pytest.raises(VoxelFormatError):
        load_file(path, force_format="vly")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_file(tmp_path / "missing.vox")


def test_detect_reports_format():
    manager = FormatManager()
    assert manager.detect(single_voxel_file(), "model.vox")[0] == "MagicaVoxel"
    assert manager.detect(single_voxel_file())[0] == "MagicaVoxel"
    assert manager.detect(VLY_TEXT.encode(), "scene.txt")[0] == "VLY voxel list"


def test_detect_file(tmp_path):
    path = tmp_path / "scene.data"
    path.write_text(VLY_TEXT)

    name, scene = detect_file(path)
    assert name == "VLY voxel list"
    assert len(scene.voxels) == 1


def test_fallback_with_deeply_nested_chunks():
    group = b''
    for _ in range(5000):
        group = chunk(b'nGRP', b'', group)
    data = vox_file(size_chunk(1, 1, 1), xyzi_chunk([(0, 0, 0, 1)]), group)

    assert len(parse_scene(data, "scene.unknown").voxels) == 1
    assert len(parse_scene(data, "scene.vox").voxels) == 1
