import pytest

from easypath.io import DiskFileSystem, MemoryFileSystem


@pytest.fixture
def memory_fs():
    """An empty in-memory filesystem; the shared fsspec store is wiped around each test."""
    fs = MemoryFileSystem()
    fs.clear()
    yield fs
    fs.clear()


@pytest.fixture
def disk_fs():
    return DiskFileSystem()


@pytest.fixture(params=["disk", "memory"])
def any_fs(request, tmp_path):
    """Yields (filesystem, root) for both backends."""
    if request.param == "disk":
        yield DiskFileSystem(), str(tmp_path)
    else:
        fs = MemoryFileSystem()
        fs.clear()
        yield fs, "/workspace"
        fs.clear()
