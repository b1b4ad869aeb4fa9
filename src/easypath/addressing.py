"""
Addresses accepted by the path managers.

An address is either a registered key or a literal filesystem path:

    manager.exists("logs")              # bare value, looked up as a key
    manager.exists(by_key("logs"))      # same, explicit
    manager.exists(by_path("/var/log")) # literal path, registry is bypassed
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

logger = logging.getLogger(__name__)

K = TypeVar('K')


@dataclass(frozen=True)
class KeyAddress(Generic[K]):
    """Address a resource through its registered key."""
    key: K


@dataclass(frozen=True)
class PathAddress:
    """Address a resource through a literal filesystem path."""
    path: str

    def __post_init__(self):
        # accept pathlib objects but keep the text exactly as given
        object.__setattr__(self, "path", os.fspath(self.path))


Address = Union[KeyAddress, PathAddress]


def by_key(key: K) -> KeyAddress:
    return KeyAddress(key)


def by_path(path: Union[str, os.PathLike]) -> PathAddress:
    return PathAddress(path)


def as_address(addr: Any) -> Address:
    """Wrap a bare value as a key address, pass explicit addresses through."""
    if isinstance(addr, (KeyAddress, PathAddress)):
        return addr
    return KeyAddress(addr)


def resolve(addr: Any, lookup: Callable[[Any], str]) -> str:
    """
    Turn an address into a concrete path.

    Key addresses go through ``lookup`` (a registry's ``get_path``) and
    propagate its KeyNotFoundError; path addresses are returned verbatim.
    """
    address = as_address(addr)
    if isinstance(address, PathAddress):
        return address.path
    path = lookup(address.key)
    logger.debug(f"Resolved key {address.key!r} -> '{path}'")
    return path
