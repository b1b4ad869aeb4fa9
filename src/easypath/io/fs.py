from abc import ABC, abstractmethod
from typing import Dict, List, IO, Union
import logging
import os

import fsspec
from fsspec.core import split_protocol

from ..utils.typing_compat import override
from .. import constants
from ..exceptions import ProtocolError, DirectoryNotEmptyError
from .decorators import wrap_io_error

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# --------------------------------------------------------
#
# Abstract Base FileSystem Interface
#
# --------------------------------------------------------
"""
    Abstract Base FileSystem Interface,
    define the primitive operations the path managers are built on.
"""

class FileSystem(ABC):
    """EasyPath File System Abstract Base Class"""

    @abstractmethod
    def read_text(self, path: PathLike, encoding: str = constants.DEFAULT_ENCODING) -> str:
        """Read text from a file"""
        pass

    @abstractmethod
    def read_bytes(self, path: PathLike) -> bytes:
        """Read bytes from a file"""
        pass

    @abstractmethod
    def write_text(self, path: PathLike, content: str, encoding: str = constants.DEFAULT_ENCODING):
        """Write text to a file, truncating it first"""
        pass

    @abstractmethod
    def write_bytes(self, path: PathLike, content: bytes):
        """Write bytes to a file, truncating it first"""
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Check if a path exists"""
        pass

    @abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """Check if a path is a directory"""
        pass

    @abstractmethod
    def is_file(self, path: PathLike) -> bool:
        """Check if a path is a file"""
        pass

    @abstractmethod
    def mkdir(self, path: PathLike, parents: bool = False, exist_ok: bool = False):
        """Create a directory"""
        pass

    @abstractmethod
    def touch(self, path: PathLike):
        """Create an empty file, leaving an existing file untouched"""
        pass

    @abstractmethod
    def rmdir(self, path: PathLike, recursive: bool = False):
        """Remove a directory; non-recursive removal requires it to be empty"""
        pass

    @abstractmethod
    def remove(self, path: PathLike):
        """Remove a file"""
        pass

    @abstractmethod
    def listdir(self, path: PathLike) -> List[str]:
        """List directory contents"""
        pass

    @abstractmethod
    def open(self, path: PathLike, mode: str = "rb", **kwargs) -> IO:
        """Open a file"""
        pass


# --------------------
#
# Generic FileSystem
#
# --------------------

class GenericFileSystem(FileSystem, ABC):
    """Generic File System base class for fsspec implementations"""

    def __init__(self, fs_instance, name=None):
        """
        Initialize with a filesystem instance

        Args:
            fs_instance: The underlying fsspec filesystem instance
            name: Optional name for logging purposes
        """
        self.fs = fs_instance
        self.name = name or f"{type(fs_instance).__name__}"

    @abstractmethod
    def path2str(self, path: PathLike) -> str:
        """Convert a path to the string the backend understands"""
        pass

    @override
    @wrap_io_error
    def read_text(self, path: PathLike, encoding: str = constants.DEFAULT_ENCODING) -> str:
        logger.debug(f"[{self.name}] Reading from: {path}")
        with self.open(path, "r", encoding=encoding, newline="") as f:
            return f.read()

    @override
    @wrap_io_error
    def read_bytes(self, path: PathLike) -> bytes:
        logger.debug(f"[{self.name}] Reading bytes from: {path}")
        with self.open(path, "rb") as f:
            return f.read()

    @override
    @wrap_io_error
    def write_text(self, path: PathLike, content: str, encoding: str = constants.DEFAULT_ENCODING):
        logger.debug(f"[{self.name}] Writing to: {path}")
        with self.open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)

    @override
    @wrap_io_error
    def write_bytes(self, path: PathLike, content: bytes):
        logger.debug(f"[{self.name}] Writing bytes to: {path}")
        with self.open(path, "wb") as f:
            f.write(content)

    @override
    def exists(self, path: PathLike) -> bool:
        return self.fs.exists(self.path2str(path))

    @override
    def is_dir(self, path: PathLike) -> bool:
        return self.fs.isdir(self.path2str(path))

    @override
    def is_file(self, path: PathLike) -> bool:
        return self.fs.isfile(self.path2str(path))

    @override
    @wrap_io_error
    def mkdir(self, path: PathLike, parents: bool = False, exist_ok: bool = False):
        logger.debug(f"[{self.name}] Creating directory: {path}")
        path_str = self.path2str(path)
        if parents:
            self.fs.makedirs(path_str, exist_ok=exist_ok)
            return
        if exist_ok and self.fs.isdir(path_str):
            return
        self.fs.mkdir(path_str, create_parents=False)

    @override
    @wrap_io_error
    def touch(self, path: PathLike):
        path_str = self.path2str(path)
        if self.fs.isfile(path_str):
            return
        logger.debug(f"[{self.name}] Creating empty file: {path}")
        self.fs.touch(path_str)

    @override
    @wrap_io_error
    def rmdir(self, path: PathLike, recursive: bool = False):
        path_str = self.path2str(path)
        if recursive:
            logger.debug(f"[{self.name}] Removing directory tree: {path}")
            self.fs.rm(path_str, recursive=True)
            return
        if self.fs.ls(path_str, detail=False):
            raise DirectoryNotEmptyError(f"Directory is not empty: {path}")
        logger.debug(f"[{self.name}] Removing empty directory: {path}")
        self.fs.rmdir(path_str)

    @override
    @wrap_io_error
    def remove(self, path: PathLike):
        logger.debug(f"[{self.name}] Removing file: {path}")
        self.fs.rm_file(self.path2str(path))

    @override
    @wrap_io_error
    def listdir(self, path: PathLike) -> List[str]:
        return list(self.fs.ls(self.path2str(path), detail=False))

    @override
    @wrap_io_error
    def open(self, path: PathLike, mode: str = "rb", **kwargs) -> IO:
        """Open a file"""
        logger.debug(f"[{self.name}] Opening: {path} with mode '{mode}'")
        return self.fs.open(self.path2str(path), mode=mode, **kwargs)


class FsspecFileSystem(GenericFileSystem):
    """fsspec-based File System"""

    def __init__(self, protocol=constants.DEFAULT_PROTOCOL):
        fs_instance = fsspec.filesystem(protocol)
        super().__init__(fs_instance, name=f"{protocol}FS")
        self.protocol = protocol

    @override
    def path2str(self, path: PathLike) -> str:
        return os.fspath(path)


# --------------------
#
# Disk FileSystem
#
# --------------------

class DiskFileSystem(FsspecFileSystem):
    """Local disk file system using fsspec"""

    def __init__(self):
        super().__init__(protocol="file")

    @override
    def path2str(self, path: PathLike) -> str:
        """Drop an explicit file:// prefix, leave everything else as given"""
        protocol, path_str = split_protocol(os.fspath(path))
        if protocol == "file":
            return path_str
        return os.fspath(path)

    @override
    @wrap_io_error
    def open(self, path: PathLike, mode: str = "rb", **kwargs) -> IO:
        """Open a file"""
        logger.debug(f"[{self.name}] Opening: {path} with mode '{mode}'")
        return open(self.path2str(path), mode, **kwargs)


# --------------------
#
# Memory (Fake) FileSystem
#
# --------------------

class MemoryFileSystem(FsspecFileSystem):
    """
    in-memory filesystem using fsspec
    """
    def __init__(self):
        super().__init__(protocol="memory")

    def clear(self):
        """Drop every file and directory held by the in-memory store"""
        # fsspec keeps the memory store on the class, shared by all instances
        self.fs.store.clear()
        self.fs.pseudo_dirs.clear()
        self.fs.pseudo_dirs.append("")


# --------------------
#
# Application FileSystem
#
# --------------------

class AppFileSystem(FileSystem):
    """
        dispatch every operation to the handler registered
        for the protocol of the path, like file:// or memory://
    """

    def __init__(self):
        self._handlers: Dict[str, FileSystem] = {}
        self.register_handler("file", DiskFileSystem())
        self.register_handler("memory", MemoryFileSystem())

    def register_handler(self, protocol: str, handler: FileSystem):
        """Register a file system handler for a specific protocol."""
        self._handlers[protocol] = handler

    def unregister_handler(self, protocol: str):
        """Unregister the file system handler for a specific protocol."""
        if protocol in self._handlers:
            del self._handlers[protocol]

    @classmethod
    def _delegator(cls, method_name: str):
        def decorator(self, path: PathLike, *args, **kwargs):
            handler = self._get_handler(path)
            method = getattr(handler, method_name, None)
            if method is None:
                raise NotImplementedError(
                    f"FileSystem handler {type(handler).__name__} does not support '{method_name}'"
                )
            return method(path, *args, **kwargs)
        return decorator

    def _get_handler(self, path: PathLike) -> FileSystem:
        """Get the file system handler for a specific path."""
        protocol, _ = split_protocol(os.fspath(path))
        protocol = protocol or constants.DEFAULT_PROTOCOL
        handler = self._handlers.get(protocol)
        if not handler:
            raise ProtocolError(
                f"No filesystem handler registered for protocol: '{protocol}'"
            )
        return handler

    @override
    def read_text(self, path: PathLike, encoding: str = constants.DEFAULT_ENCODING) -> str:
        return AppFileSystem._delegator("read_text")(self, path, encoding=encoding)

    @override
    def read_bytes(self, path: PathLike) -> bytes:
        return AppFileSystem._delegator("read_bytes")(self, path)

    @override
    def write_text(self, path: PathLike, content: str, encoding: str = constants.DEFAULT_ENCODING):
        return AppFileSystem._delegator("write_text")(self, path, content, encoding=encoding)

    @override
    def write_bytes(self, path: PathLike, content: bytes):
        return AppFileSystem._delegator("write_bytes")(self, path, content)

    @override
    def exists(self, path: PathLike) -> bool:
        return AppFileSystem._delegator("exists")(self, path)

    @override
    def is_dir(self, path: PathLike) -> bool:
        return AppFileSystem._delegator("is_dir")(self, path)

    @override
    def is_file(self, path: PathLike) -> bool:
        return AppFileSystem._delegator("is_file")(self, path)

    @override
    def mkdir(self, path: PathLike, parents: bool = False, exist_ok: bool = False):
        return AppFileSystem._delegator("mkdir")(self, path, parents=parents, exist_ok=exist_ok)

    @override
    def touch(self, path: PathLike):
        return AppFileSystem._delegator("touch")(self, path)

    @override
    def rmdir(self, path: PathLike, recursive: bool = False):
        return AppFileSystem._delegator("rmdir")(self, path, recursive=recursive)

    @override
    def remove(self, path: PathLike):
        return AppFileSystem._delegator("remove")(self, path)

    @override
    def listdir(self, path: PathLike) -> List[str]:
        return AppFileSystem._delegator("listdir")(self, path)

    @override
    def open(self, path: PathLike, mode: str = "rb", **kwargs) -> IO:
        return AppFileSystem._delegator("open")(self, path, mode, **kwargs)


# --------------------
#
# Helper Functions
#
# --------------------

def create_app_fs(use_vfs: bool = False) -> AppFileSystem:
    """
    Create an AppFileSystem instance; with ``use_vfs`` plain paths
    are served from memory instead of the local disk.
    """
    app_fs = AppFileSystem()
    if use_vfs:
        app_fs.register_handler("file", MemoryFileSystem())
    return app_fs
