from enum import Enum

import pytest

from easypath import DirectoryManager, FileManager
from easypath.exceptions import KeyNotFoundError, PathNotFoundError


class Resource(Enum):
    LOGS = "logs"
    CACHE = "cache"


@pytest.fixture
def registry(memory_fs):
    return DirectoryManager(fs=memory_fs)


class TestRegistryMapping:
    """In-memory key -> path operations; none of these touch the filesystem."""

    def test_add_then_get(self, registry):
        registry.add_path("logs", "/var/logs")
        assert registry.get_path("logs") == "/var/logs"

    def test_first_registration_wins(self, registry):
        registry.add_path("logs", "/var/logs")
        registry.add_path("logs", "/tmp/other")
        assert registry.get_path("logs") == "/var/logs"

    def test_add_paths_skips_present_keys(self, registry):
        registry.add_path("logs", "/var/logs")
        registry.add_paths({"logs": "/ignored", "cache": "/var/cache"})
        assert registry.get_path("logs") == "/var/logs"
        assert registry.get_path("cache") == "/var/cache"
        assert len(registry) == 2

    def test_add_path_accepts_pathlike(self, registry, tmp_path):
        registry.add_path("tmp", tmp_path / "sub")
        assert registry.get_path("tmp") == str(tmp_path / "sub")

    def test_remove_then_get_fails(self, registry):
        registry.add_path("logs", "/var/logs")
        registry.remove_path("logs")
        with pytest.raises(KeyNotFoundError):
            registry.get_path("logs")

    def test_remove_missing_key_is_noop(self, registry):
        registry.add_path("logs", "/var/logs")
        registry.remove_path("ghost")
        assert registry.paths == {"logs": "/var/logs"}

    def test_remove_paths(self, registry):
        registry.add_paths({"a": "/a", "b": "/b", "c": "/c"})
        registry.remove_paths(["a", "c", "ghost"])
        assert list(registry) == ["b"]

    def test_clear_paths(self, registry):
        registry.add_paths({"a": "/a", "b": "/b"})
        registry.clear_paths()
        assert len(registry) == 0
        assert "a" not in registry

    def test_get_unknown_key(self, registry):
        with pytest.raises(KeyNotFoundError, match="ghost") as excinfo:
            registry.get_path("ghost")
        assert isinstance(excinfo.value, KeyError)
        assert excinfo.value.key == "ghost"

    def test_initial_mapping_is_adopted(self, memory_fs):
        initial = {"logs": "/var/logs"}
        registry = DirectoryManager(initial, fs=memory_fs)
        registry.add_path("cache", "/var/cache")
        assert initial == {"logs": "/var/logs", "cache": "/var/cache"}

    def test_pathlike_seed_values_become_str(self, memory_fs, tmp_path):
        initial = {"tmp": tmp_path / "sub"}
        registry = DirectoryManager(initial, fs=memory_fs)
        assert registry.get_path("tmp") == str(tmp_path / "sub")
        assert isinstance(registry.get_path("tmp"), str)
        assert initial["tmp"] == str(tmp_path / "sub")

    def test_paths_view_is_read_only(self, registry):
        registry.add_path("logs", "/var/logs")
        with pytest.raises(TypeError):
            registry.paths["logs"] = "/elsewhere"

    def test_has_path_and_contains(self, registry):
        registry.add_path("logs", "/var/logs")
        assert registry.has_path("logs")
        assert "logs" in registry
        assert not registry.has_path("cache")

    def test_enum_keys(self, memory_fs):
        registry = FileManager({Resource.LOGS: "/var/app.log"}, fs=memory_fs)
        assert registry.get_path(Resource.LOGS) == "/var/app.log"
        with pytest.raises(KeyNotFoundError):
            registry.get_path(Resource.CACHE)

    def test_registration_does_not_touch_filesystem(self, registry, memory_fs):
        registry.add_path("logs", "/var/logs")
        assert not memory_fs.exists("/var/logs")
        assert not registry.exists("logs")


class TestCreatePaths:

    def test_creates_missing_directories(self, tmp_path):
        registry = DirectoryManager({
            "logs": str(tmp_path / "var" / "logs"),
            "cache": str(tmp_path / "cache"),
        })
        registry.create_paths()
        assert (tmp_path / "var" / "logs").is_dir()
        assert (tmp_path / "cache").is_dir()

    def test_creates_missing_files_and_keeps_existing(self, tmp_path):
        existing = tmp_path / "keep.txt"
        existing.write_text("content")
        registry = FileManager({
            "keep": str(existing),
            "new": str(tmp_path / "new.txt"),
        })
        registry.create_paths()
        assert existing.read_text() == "content"
        assert (tmp_path / "new.txt").read_bytes() == b""

    def test_failure_propagates_and_keeps_mappings(self, tmp_path):
        mapping = {"orphan": str(tmp_path / "missing-dir" / "file.txt")}
        registry = FileManager(mapping)
        with pytest.raises(PathNotFoundError):
            registry.create_paths()
        assert registry.paths == mapping
