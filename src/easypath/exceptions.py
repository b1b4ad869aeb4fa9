class EasyPathError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to the key -> path registry ---
class RegistryError(EasyPathError):
    """Base class for errors raised by a path registry."""

    pass


class KeyNotFoundError(RegistryError, KeyError):
    """Raised when a key is looked up but was never registered (or was removed)."""

    def __init__(self, key, message: str = None):
        self.key = key
        super().__init__(message or f"Key is not registered: {key!r}")

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the message readable
        return str(self.args[0])


class InvalidAddressError(RegistryError, ValueError):
    """Raised when an address or its companion arguments can not be interpreted."""

    pass


# --- 2. Errors related to IO operations ---
class EasyPathIOError(EasyPathError):
    """Base class for IO-related errors."""

    pass


class ProtocolError(EasyPathIOError):
    """Raised when no filesystem handler is registered for a path's protocol."""

    pass


class PathExistsError(EasyPathIOError):
    """Raised when a file or directory already exists."""

    pass


class PathNotFoundError(EasyPathIOError):
    """Raised when a file or directory is not found."""

    pass


class NotAFileError(EasyPathIOError):
    """Raised when a file is expected, but a directory is found."""

    pass


class NotADirError(EasyPathIOError):
    """Raised when a directory is expected, but a file is found."""

    pass


class DirectoryNotEmptyError(EasyPathIOError):
    """Raised when a non-recursive delete targets a directory that still has entries."""

    pass


class PermissionDeniedError(EasyPathIOError):
    """Raised when the operating system refuses access to a path."""

    pass


# --- 3. Errors related to typed content encoding ---
class CodecError(EasyPathError):
    """Base class for content encoding and decoding errors."""

    pass


class SerializationError(CodecError):
    """Raised when a value can not be encoded to the structured format."""

    pass


class DeserializationError(CodecError):
    """Raised when file content is malformed or does not match the requested shape."""

    pass


# --- 4. Errors related to loading and parsing the configuration file ---
class ConfigurationError(EasyPathError):
    """Base class for errors encountered while finding, reading, or parsing config files."""

    pass


class ConfigFileMissingError(ConfigurationError):
    """Raised when the configuration file cannot be found."""

    pass


class ConfigParsingError(ConfigurationError):
    """Raised when a YAML configuration file is syntactically incorrect."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when the configuration fails structural validation (e.g., Pydantic)."""

    pass
