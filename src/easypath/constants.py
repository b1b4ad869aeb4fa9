from enum import Enum

# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "reg": "easypath.registry",
    "rty": "easypath.registry",
    "addr": "easypath.addressing",
    "content": "easypath.content",
    "codec": "easypath.content",
    "io": "easypath.io",
    "fs": "easypath.io.fs",
    "conf": "easypath.config",
    "cli": "easypath.cli",
}

# Top-level modules within easypath for auto-prefixing
KNOWN_TOP_MODULES = {
    "io",
    "utils",
    "exceptions",
    "config",
    "registry",
    "addressing",
    "content",
    "cli",
}

LOG_LEVELS_ENV = "EASYPATH_LOG_LEVELS"

# --- Filesystem ---
DEFAULT_PROTOCOL = "file"

# --- Content ---
DEFAULT_ENCODING = "utf-8"
DEFAULT_NEWLINE = "\n"
YAML_SUFFIXES = (".yml", ".yaml")


class StructuredFormat(str, Enum):
    """On-disk format used for structured records."""

    JSON = "json"
    YAML = "yaml"
    AUTO = "auto"
