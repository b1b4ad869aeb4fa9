"""
EasyPath Registries

Key -> path registries for directories and files.

- PathRegistry: the generic mapping plus the addressing and existence rules
- DirectoryManager: directories, created with parents, deleted optionally recursively
- FileManager: files, with typed read/write through a TypedContentAccessor

Registry membership and filesystem state are independent: deleting the object
behind a key never removes the key, and registering a key never touches the disk.
Instances are not synchronised; callers sharing one across threads must lock.
"""

import logging
import os
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, Mapping, Optional, TypeVar, Union

from .addressing import PathAddress, as_address, resolve
from .content import ContentOptions, TypedContentAccessor
from .exceptions import KeyNotFoundError, InvalidAddressError
from .io.fs import FileSystem, create_app_fs
from .utils.typing_compat import override

logger = logging.getLogger(__name__)

K = TypeVar('K')


def _identity(path: str) -> Any:
    return path


class PathRegistry(Generic[K], ABC):
    """
    A mapping of application keys to filesystem paths.

    The first registration of a key wins: adding a key that is already
    present is a no-op, and so is removing a key that is absent.
    """

    kind: str = "path"

    def __init__(
        self,
        initial_paths: Optional[Dict[K, str]] = None,
        fs: Optional[FileSystem] = None,
        key_from_path: Optional[Callable[[str], K]] = None,
    ):
        """
        Args:
            initial_paths: Mapping to seed the registry with. It is adopted, not
                copied: later changes through the registry are visible to the
                caller. Path-like values are converted to str in place.
            fs: Filesystem the paths live on; defaults to an AppFileSystem.
            key_from_path: Turns a literal path into a key when ``create`` is
                given a path address without an explicit key.
        """
        self._registry: Dict[K, str] = initial_paths if initial_paths is not None else {}
        for key, path in list(self._registry.items()):
            if not isinstance(path, str):
                self._registry[key] = os.fspath(path)
        self.fs = fs if fs is not None else create_app_fs()
        self.key_from_path = key_from_path or _identity
        logger.debug(f"Initialized {self.__class__.__name__} with {len(self._registry)} {self.kind}(s)")

    # --- filesystem hooks ---

    @abstractmethod
    def _exists_at(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def _create_at(self, path: str):
        raise NotImplementedError

    # --- registry operations ---

    def add_path(self, key: K, path: Union[str, os.PathLike]):
        if key in self._registry:
            logger.debug(f"[{self.kind}] Key {key!r} already registered, keeping '{self._registry[key]}'")
            return
        self._registry[key] = os.fspath(path)
        logger.debug(f"[{self.kind}] Registered {key!r} -> '{self._registry[key]}'")

    def add_paths(self, paths: Mapping[K, Union[str, os.PathLike]]):
        for key, path in paths.items():
            self.add_path(key, path)

    def remove_path(self, key: K):
        if self._registry.pop(key, None) is not None:
            logger.debug(f"[{self.kind}] Removed {key!r}")

    def remove_paths(self, keys: Iterable[K]):
        for key in keys:
            self.remove_path(key)

    def clear_paths(self):
        self._registry.clear()
        logger.debug(f"[{self.kind}] Cleared all keys")

    def get_path(self, key: K) -> str:
        try:
            return self._registry[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    def has_path(self, key: K) -> bool:
        return key in self._registry

    @property
    def paths(self) -> Mapping[K, str]:
        """Read-only live view of the registry."""
        return MappingProxyType(self._registry)

    def __contains__(self, key: object) -> bool:
        return key in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[K]:
        return iter(self._registry)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._registry!r})"

    # --- addressed operations ---

    def resolve(self, addr) -> str:
        """Concrete path for a key (bare or ``by_key``) or a ``by_path`` literal."""
        return resolve(addr, self.get_path)

    def exists(self, addr) -> bool:
        return self._exists_at(self.resolve(addr))

    def create_paths(self):
        """
        Create every registered path that does not exist yet.

        The first filesystem error aborts the loop and propagates; objects
        created before it are kept and no mapping is changed.
        """
        for key, path in list(self._registry.items()):
            if self._exists_at(path):
                continue
            logger.debug(f"[{self.kind}] Creating '{path}' for {key!r}")
            self._create_at(path)

    def create(self, addr, path: Union[str, os.PathLike, None] = None, *, key: Optional[K] = None):
        """
        Register an address and make sure its object exists.

        ``create(key, path)`` registers ``key -> path`` unless the key is
        already registered. ``create(by_path(p))`` registers ``p`` under
        ``key_from_path(p)``, or under ``key`` when one is given.
        In both cases the key's registered path is then created if absent.
        """
        address = as_address(addr)
        if isinstance(address, PathAddress):
            if path is not None:
                raise InvalidAddressError(
                    f"A path address already names its path ('{address.path}'); pass the key with key="
                )
            reg_key = key if key is not None else self.key_from_path(address.path)
            self.add_path(reg_key, address.path)
        else:
            if key is not None:
                raise InvalidAddressError("key= is only accepted together with a path address")
            if path is None:
                raise InvalidAddressError(f"A path is required to create {self.kind} key {address.key!r}")
            reg_key = address.key
            self.add_path(reg_key, path)

        target = self._registry[reg_key]
        if not self._exists_at(target):
            logger.debug(f"[{self.kind}] Creating '{target}' for {reg_key!r}")
            self._create_at(target)


class DirectoryManager(PathRegistry[K]):
    """Registry of directories."""

    kind = "directory"

    @override
    def _exists_at(self, path: str) -> bool:
        return self.fs.is_dir(path)

    @override
    def _create_at(self, path: str):
        self.fs.mkdir(path, parents=True, exist_ok=True)

    def delete(self, addr, recursive: bool = False):
        """
        Delete the directory behind ``addr`` if it exists; the key stays registered.

        Raises:
            DirectoryNotEmptyError: ``recursive`` is false and the directory has entries.
        """
        path = self.resolve(addr)
        if not self.fs.is_dir(path):
            logger.debug(f"[{self.kind}] '{path}' does not exist, nothing to delete")
            return
        self.fs.rmdir(path, recursive=recursive)


class FileManager(PathRegistry[K]):
    """Registry of files with typed content access."""

    kind = "file"

    def __init__(
        self,
        initial_paths: Optional[Dict[K, str]] = None,
        fs: Optional[FileSystem] = None,
        key_from_path: Optional[Callable[[str], K]] = None,
        options: Optional[ContentOptions] = None,
    ):
        super().__init__(initial_paths, fs=fs, key_from_path=key_from_path)
        self.content = TypedContentAccessor(self.fs, options)

    @override
    def _exists_at(self, path: str) -> bool:
        return self.fs.is_file(path)

    @override
    def _create_at(self, path: str):
        self.fs.touch(path)

    def delete(self, addr):
        """Delete the file behind ``addr`` if it exists; the key stays registered."""
        path = self.resolve(addr)
        if not self.fs.is_file(path):
            logger.debug(f"[{self.kind}] '{path}' does not exist, nothing to delete")
            return
        self.fs.remove(path)

    def read(self, addr, shape: Any = str) -> Any:
        """
        Read the file behind ``addr`` as ``shape``.

        ``str``, ``bytes``, ``list[str]`` and ``Iterator[str]`` read text, raw
        bytes, eager lines and a lazy ``LineStream``; any other shape is decoded
        as a structured record.
        """
        return self.content.read(self.resolve(addr), shape)

    def write(self, addr, data: Any, shape: Any = None):
        """
        Overwrite the file behind ``addr`` with ``data``.

        The encoding is chosen from ``shape`` when given (the same shapes ``read``
        accepts), else from the runtime type of ``data``.
        """
        self.content.write(self.resolve(addr), data, shape)
