"""
Typed file content.

A single read/write entry point backed by a closed set of codecs:

- TextCodec: the whole file as ``str``
- BytesCodec: the whole file as ``bytes``
- LineCodec: an eager ``list`` of lines
- LazyLineCodec: a single-pass ``LineStream`` over the lines
- StructuredCodec: any other shape, decoded/encoded with pydantic (JSON or YAML)

Reads pick the codec from the requested shape, writes from the runtime type
of the value. Every shape the first four codecs do not claim goes to the
structured codec, so the choice is total.
"""

import codecs
import collections.abc
import functools
import logging
import re
import typing
from abc import ABC, abstractmethod
from typing import Any, IO, Iterable, Iterator, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError, field_validator
from pydantic_core import PydanticSerializationError

from . import constants
from .constants import StructuredFormat
from .io.fs import FileSystem
from .exceptions import SerializationError, DeserializationError
from .utils.typing_compat import override

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence, collections.abc.MutableSequence)
_LAZY_ORIGINS = (collections.abc.Iterator, collections.abc.Iterable, collections.abc.Generator)


def check_encoding(encoding: str) -> str:
    """Reject encoding names Python does not know, before any file is opened with them."""
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ValueError(f"Unknown text encoding: {encoding!r}") from e
    return encoding


class ContentOptions(BaseModel):
    """How text and structured records are laid out on disk."""
    model_config = ConfigDict(frozen=True)

    encoding: str = constants.DEFAULT_ENCODING
    newline: str = constants.DEFAULT_NEWLINE
    structured_format: StructuredFormat = StructuredFormat.JSON
    indent: Optional[int] = None

    @field_validator("encoding")
    @classmethod
    def known_encoding(cls, value: str) -> str:
        return check_encoding(value)

    def format_for(self, path: str) -> StructuredFormat:
        """Concrete structured format for ``path``; ``auto`` looks at the suffix."""
        if self.structured_format is not StructuredFormat.AUTO:
            return self.structured_format
        if path.lower().endswith(constants.YAML_SUFFIXES):
            return StructuredFormat.YAML
        return StructuredFormat.JSON


def split_lines(text: str) -> List[str]:
    """Split on \\r\\n, \\r or \\n; a trailing line break does not add an empty line."""
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


class LineStream(Iterator[str]):
    """
    Forward-only, single-pass iterator over the lines of an open file.

    The handle is released when the stream is exhausted, when ``close()``
    is called or when a ``with`` block around the stream exits.
    """

    def __init__(self, handle: IO, path: str):
        self._handle = handle
        self.path = path

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __iter__(self) -> "LineStream":
        return self

    def __next__(self) -> str:
        if self._handle is None:
            raise StopIteration
        try:
            line = self._handle.readline()
        except UnicodeDecodeError as e:
            self.close()
            raise DeserializationError(f"Can not decode a line of '{self.path}': {e}") from e
        if not line:
            self.close()
            raise StopIteration
        return line[:-1] if line.endswith("\n") else line

    def close(self):
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            logger.debug(f"Closed line stream for '{self.path}'")

    def __enter__(self) -> "LineStream":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"{self.__class__.__name__}('{self.path}', {state})"


# --------------------
#
# Codecs
#
# --------------------

class Codec(ABC):
    """One way of turning file content into a value and back."""

    name: str = "codec"

    @abstractmethod
    def read(self, fs: FileSystem, path: str, options: ContentOptions, shape: Any) -> Any:
        pass

    @abstractmethod
    def write(self, fs: FileSystem, path: str, data: Any, options: ContentOptions, shape: Any = None):
        pass


class TextCodec(Codec):
    name = "text"

    @override
    def read(self, fs: FileSystem, path: str, options: ContentOptions, shape: Any) -> str:
        try:
            return fs.read_text(path, encoding=options.encoding)
        except UnicodeDecodeError as e:
            raise DeserializationError(f"'{path}' is not valid {options.encoding} text: {e}") from e

    @override
    def write(self, fs: FileSystem, path: str, data: str, options: ContentOptions, shape: Any = None):
        if not isinstance(data, str):
            raise SerializationError(f"Text written to '{path}' must be str, got {type(data).__name__}")
        try:
            fs.write_text(path, data, encoding=options.encoding)
        except UnicodeEncodeError as e:
            raise SerializationError(f"Can not encode text for '{path}' as {options.encoding}: {e}") from e


class BytesCodec(Codec):
    name = "bytes"

    @override
    def read(self, fs: FileSystem, path: str, options: ContentOptions, shape: Any) -> bytes:
        data = fs.read_bytes(path)
        if shape is bytearray:
            return bytearray(data)
        return data

    @override
    def write(self, fs: FileSystem, path: str, data: bytes, options: ContentOptions, shape: Any = None):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise SerializationError(f"Bytes written to '{path}' must be bytes-like, got {type(data).__name__}")
        fs.write_bytes(path, bytes(data))


class LineCodec(Codec):
    name = "lines"

    @override
    def read(self, fs: FileSystem, path: str, options: ContentOptions, shape: Any):
        lines = split_lines(TEXT_CODEC.read(fs, path, options, str))
        if (typing.get_origin(shape) or shape) is tuple:
            return tuple(lines)
        return lines

    @override
    def write(self, fs: FileSystem, path: str, data: Iterable[str], options: ContentOptions, shape: Any = None):
        if isinstance(data, (str, bytes)):
            raise SerializationError(f"Lines written to '{path}' must be a sequence of str, not a single {type(data).__name__}")
        try:
            payload = "".join(line + options.newline for line in data)
        except TypeError as e:
            raise SerializationError(f"Lines written to '{path}' must all be str: {e}") from e
        TEXT_CODEC.write(fs, path, payload, options)


class LazyLineCodec(Codec):
    name = "lazy-lines"

    @override
    def read(self, fs: FileSystem, path: str, options: ContentOptions, shape: Any) -> LineStream:
        # opened here so a missing file fails now, not on the first next()
        handle = fs.open(path, "r", encoding=options.encoding)
        return LineStream(handle, path)

    @override
    def write(self, fs: FileSystem, path: str, data: Iterator[str], options: ContentOptions, shape: Any = None):
        # drained before the target is truncated; writes are never streamed
        LINE_CODEC.write(fs, path, list(data), options)


def _eager_shape(shape: Any) -> Any:
    """List counterpart of a lazy shape such as ``Iterator[int]``; other shapes unchanged."""
    if (typing.get_origin(shape) or shape) not in _LAZY_ORIGINS:
        return shape
    args = typing.get_args(shape)
    return List[args[0]] if args else list


class StructuredCodec(Codec):
    name = "structured"

    @override
    def read(self, fs: FileSystem, path: str, options: ContentOptions, shape: Any) -> Any:
        fmt = options.format_for(path)
        # lazy shapes are validated eagerly so a bad element fails here, not mid-iteration
        eager = _eager_shape(shape)
        try:
            adapter = TypeAdapter(eager)
        except PydanticUserError as e:
            raise DeserializationError(f"Can not decode into {shape!r}: {e}") from e

        raw = fs.read_bytes(path)
        try:
            if fmt is StructuredFormat.YAML:
                value = adapter.validate_python(yaml.safe_load(raw.decode(options.encoding)))
            else:
                value = adapter.validate_json(raw)
        except (ValidationError, yaml.YAMLError, UnicodeDecodeError) as e:
            raise DeserializationError(
                f"Content of '{path}' is not a valid {fmt.value} {shape!r}: {e}"
            ) from e
        return iter(value) if eager is not shape else value

    @override
    def write(self, fs: FileSystem, path: str, data: Any, options: ContentOptions, shape: Any = None):
        fmt = options.format_for(path)
        if shape is None:
            shape = type(data)
        elif _eager_shape(shape) is not shape:
            shape = _eager_shape(shape)
            try:
                data = list(data)
            except TypeError as e:
                raise SerializationError(f"Can not encode {type(data).__name__} as a sequence for '{path}': {e}") from e
        try:
            adapter = TypeAdapter(shape)
            if fmt is StructuredFormat.YAML:
                document = adapter.dump_python(data, mode="json")
                payload = yaml.safe_dump(
                    document, allow_unicode=True, sort_keys=False, indent=options.indent
                ).encode(options.encoding)
            else:
                payload = adapter.dump_json(data, indent=options.indent)
        except (PydanticUserError, PydanticSerializationError, UnicodeEncodeError) as e:
            raise SerializationError(
                f"Can not encode {type(data).__name__} as {fmt.value} for '{path}': {e}"
            ) from e
        fs.write_bytes(path, payload)


TEXT_CODEC = TextCodec()
BYTES_CODEC = BytesCodec()
LINE_CODEC = LineCodec()
LAZY_LINE_CODEC = LazyLineCodec()
STRUCTURED_CODEC = StructuredCodec()


def _holds_text(origin: Any, args: tuple) -> bool:
    """
    Type arguments of a line container: none, ``(str,)``, or for tuples only
    the variadic ``(str, ...)``. Fixed-arity tuples are records, not lines.
    """
    if not args:
        return True
    if origin is tuple:
        return args == (str, Ellipsis)
    return args[0] is str and all(a is type(None) for a in args[1:])


def codec_for_shape(shape: Any) -> Codec:
    """Codec used to read a value of the requested shape."""
    if shape is str:
        return TEXT_CODEC
    if shape in (bytes, bytearray):
        return BYTES_CODEC
    origin = typing.get_origin(shape) or shape
    args = typing.get_args(shape)
    if origin in _SEQUENCE_ORIGINS and _holds_text(origin, args):
        return LINE_CODEC
    if origin in _LAZY_ORIGINS and _holds_text(origin, args):
        return LAZY_LINE_CODEC
    return STRUCTURED_CODEC


@functools.singledispatch
def codec_for_value(data: Any) -> Codec:
    """Codec used to write ``data``, chosen from its runtime type."""
    return STRUCTURED_CODEC


@codec_for_value.register(str)
def _(data: str) -> Codec:
    return TEXT_CODEC


@codec_for_value.register(bytes)
@codec_for_value.register(bytearray)
@codec_for_value.register(memoryview)
def _(data) -> Codec:
    return BYTES_CODEC


@codec_for_value.register(list)
@codec_for_value.register(tuple)
def _(data) -> Codec:
    if all(isinstance(item, str) for item in data):
        return LINE_CODEC
    return STRUCTURED_CODEC


@codec_for_value.register(collections.abc.Iterator)
def _(data) -> Codec:
    return LAZY_LINE_CODEC


class TypedContentAccessor:
    """
    Reads and writes typed content at concrete paths.

    Exactly one codec runs per call. Writes always truncate the target.
    """

    def __init__(self, fs: FileSystem, options: Optional[ContentOptions] = None):
        self.fs = fs
        self.options = options if options is not None else ContentOptions()

    def read(self, path: str, shape: Any = str) -> Any:
        codec = codec_for_shape(shape)
        logger.debug(f"Reading '{path}' as {shape!r} with {codec.name} codec")
        return codec.read(self.fs, path, self.options, shape)

    def write(self, path: str, data: Any, shape: Any = None):
        """
        Write ``data`` to ``path``. The codec follows ``shape`` when one is
        given, so ``write(p, [], List[Record])`` stores an empty record list
        rather than an empty text file; otherwise it follows the runtime type.
        """
        codec = codec_for_value(data) if shape is None else codec_for_shape(shape)
        logger.debug(f"Writing {type(data).__name__} to '{path}' with {codec.name} codec")
        codec.write(self.fs, path, data, self.options, shape)
