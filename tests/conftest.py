import pytest

import vox_builder


@pytest.fixture
def single_voxel_vox():
    return vox_builder.single_voxel_file()


@pytest.fixture
def simple_vly():
    return (
        "grid_size: 2 3 4\n"
        "voxel_num: 2\n"
        "0 1 2 0\n"
        "1 2 3 1\n"
        "0 10 20 30\n"
        "1 40 50 60\n"
    )
