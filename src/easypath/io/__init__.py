"""
EasyPath IO Module

- FileSystem: Abstract file system interface
- AppFileSystem: Multi-protocol file system dispatcher
- DiskFileSystem: Local disk file system
- MemoryFileSystem: In-memory file system for testing
- wrap_io_error: Translate builtin OS errors into EasyPath exceptions

Usage:
    from easypath.io import create_app_fs

    fs = create_app_fs()
    content = fs.read_text("config.yml")
"""

from .decorators import wrap_io_error
from .fs import (
    FileSystem,
    GenericFileSystem,
    FsspecFileSystem,
    AppFileSystem,
    DiskFileSystem,
    MemoryFileSystem,
    create_app_fs,
)

__all__ = [
    'wrap_io_error',
    'FileSystem',
    'GenericFileSystem',
    'FsspecFileSystem',
    'AppFileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'create_app_fs',
]
