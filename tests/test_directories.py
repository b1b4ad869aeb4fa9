import pytest

from easypath import DirectoryManager, by_key, by_path
from easypath.exceptions import (
    DirectoryNotEmptyError,
    InvalidAddressError,
    KeyNotFoundError,
)


@pytest.fixture
def dirs(tmp_path):
    return DirectoryManager({"data": str(tmp_path / "data")})


class TestExists:

    def test_registered_but_never_created(self, dirs):
        assert dirs.exists("data") is False

    def test_true_after_create(self, dirs, tmp_path):
        dirs.create("data", str(tmp_path / "data"))
        assert dirs.exists("data") is True
        assert dirs.exists(by_key("data")) is True

    def test_literal_path_bypasses_registry(self, dirs, tmp_path):
        assert dirs.exists(by_path(tmp_path)) is True
        assert dirs.exists(by_path(tmp_path / "nope")) is False

    def test_unknown_key(self, dirs):
        with pytest.raises(KeyNotFoundError):
            dirs.exists("ghost")

    def test_file_is_not_a_directory(self, dirs, tmp_path):
        (tmp_path / "plain.txt").write_text("x")
        assert dirs.exists(by_path(tmp_path / "plain.txt")) is False


class TestDelete:

    def test_non_recursive_on_non_empty_directory(self, dirs, tmp_path):
        dirs.create_paths()
        (tmp_path / "data" / "file.txt").write_text("x")
        with pytest.raises(DirectoryNotEmptyError):
            dirs.delete("data", recursive=False)
        assert (tmp_path / "data" / "file.txt").exists()

    def test_recursive_keeps_registry_entry(self, dirs, tmp_path):
        dirs.create_paths()
        (tmp_path / "data" / "nested").mkdir()
        (tmp_path / "data" / "nested" / "file.txt").write_text("x")
        dirs.delete("data", recursive=True)
        assert dirs.exists("data") is False
        assert dirs.get_path("data") == str(tmp_path / "data")

    def test_empty_directory_without_recursive(self, dirs):
        dirs.create_paths()
        dirs.delete("data")
        assert not dirs.exists("data")

    def test_missing_directory_is_noop(self, dirs):
        dirs.delete("data")
        dirs.delete(by_path("/definitely/not/here"))

    def test_delete_by_path(self, dirs, tmp_path):
        target = tmp_path / "loose"
        target.mkdir()
        dirs.delete(by_path(str(target)))
        assert not target.exists()
        assert "loose" not in dirs

    def test_unknown_key(self, dirs):
        with pytest.raises(KeyNotFoundError):
            dirs.delete("ghost")


class TestCreate:

    def test_create_by_key(self, tmp_path):
        dirs = DirectoryManager()
        dirs.create("out", str(tmp_path / "a" / "b"))
        assert dirs.get_path("out") == str(tmp_path / "a" / "b")
        assert (tmp_path / "a" / "b").is_dir()

    def test_create_on_registered_key_uses_registered_path(self, dirs, tmp_path):
        dirs.create("data", str(tmp_path / "elsewhere"))
        assert dirs.get_path("data") == str(tmp_path / "data")
        assert (tmp_path / "data").is_dir()
        assert not (tmp_path / "elsewhere").exists()

    def test_create_by_path_derives_key_from_path(self, tmp_path):
        dirs = DirectoryManager()
        literal = str(tmp_path / "derived")
        dirs.create(by_path(literal))
        assert dirs.get_path(literal) == literal
        assert dirs.exists(literal)

    def test_create_by_path_with_explicit_key(self, tmp_path):
        dirs = DirectoryManager()
        literal = str(tmp_path / "named")
        dirs.create(by_path(literal), key="named")
        assert dirs.get_path("named") == literal
        assert (tmp_path / "named").is_dir()

    def test_create_by_path_uses_key_conversion(self, tmp_path):
        dirs = DirectoryManager(key_from_path=lambda p: p.rsplit("/", 1)[-1].upper())
        literal = f"{tmp_path.as_posix()}/reports"
        dirs.create(by_path(literal))
        assert dirs.get_path("REPORTS") == literal

    def test_path_address_rejects_second_path(self, tmp_path):
        dirs = DirectoryManager()
        with pytest.raises(InvalidAddressError):
            dirs.create(by_path(tmp_path / "x"), str(tmp_path / "y"))

    def test_key_address_requires_path(self):
        dirs = DirectoryManager()
        with pytest.raises(InvalidAddressError, match="path is required"):
            dirs.create("out")

    def test_key_address_rejects_key_argument(self, tmp_path):
        dirs = DirectoryManager()
        with pytest.raises(InvalidAddressError):
            dirs.create("out", str(tmp_path), key="other")

    def test_existing_directory_is_left_alone(self, tmp_path):
        (tmp_path / "kept").mkdir()
        (tmp_path / "kept" / "inside.txt").write_text("x")
        dirs = DirectoryManager()
        dirs.create("kept", str(tmp_path / "kept"))
        assert (tmp_path / "kept" / "inside.txt").read_text() == "x"


class TestInMemory:

    def test_lifecycle(self, memory_fs):
        dirs = DirectoryManager({"root": "/proj/root"}, fs=memory_fs)
        dirs.create_paths()
        assert dirs.exists("root")
        memory_fs.write_text("/proj/root/a.txt", "x")
        with pytest.raises(DirectoryNotEmptyError):
            dirs.delete("root")
        dirs.delete("root", recursive=True)
        assert not dirs.exists("root")
        assert dirs.get_path("root") == "/proj/root"
