"""
EasyPath

Refer to directories and files through stable keys instead of hard-coded paths.

Main modules:
- registry: DirectoryManager and FileManager key -> path registries
- addressing: key and literal-path addresses
- content: typed read/write codecs
- io: File system abstraction over fsspec
- config: YAML manifest loading and validation
- utils: Utility functions

Quick start example:
```python
from easypath import DirectoryManager, FileManager, by_path

dirs = DirectoryManager({"data": "./data"})
dirs.create_paths()

files = FileManager({"notes": "./data/notes.txt"})
files.write("notes", ["first", "second"])
files.read("notes", list[str])          # ['first', 'second']
files.exists(by_path("./data/other"))   # False
```
"""

from .addressing import KeyAddress, PathAddress, Address, by_key, by_path, resolve
from .content import ContentOptions, LineStream, TypedContentAccessor
from .registry import PathRegistry, DirectoryManager, FileManager
from .io import FileSystem, AppFileSystem, DiskFileSystem, MemoryFileSystem, create_app_fs
from .exceptions import (
    EasyPathError,
    RegistryError,
    KeyNotFoundError,
    InvalidAddressError,
    EasyPathIOError,
    PathNotFoundError,
    DirectoryNotEmptyError,
    PermissionDeniedError,
    CodecError,
    SerializationError,
    DeserializationError,
    ConfigurationError,
)

__version__ = "0.3.0"

__all__ = [
    # Version
    '__version__',
    # Addressing
    'KeyAddress',
    'PathAddress',
    'Address',
    'by_key',
    'by_path',
    'resolve',
    # Content
    'ContentOptions',
    'LineStream',
    'TypedContentAccessor',
    # Registry
    'PathRegistry',
    'DirectoryManager',
    'FileManager',
    # IO
    'FileSystem',
    'AppFileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'create_app_fs',
    # Exceptions
    'EasyPathError',
    'RegistryError',
    'KeyNotFoundError',
    'InvalidAddressError',
    'EasyPathIOError',
    'PathNotFoundError',
    'DirectoryNotEmptyError',
    'PermissionDeniedError',
    'CodecError',
    'SerializationError',
    'DeserializationError',
    'ConfigurationError',
]
