import yaml
import logging
from typing import Dict, Optional, Tuple
from pydantic import BaseModel, Field, ValidationError, ConfigDict, field_validator

from .constants import StructuredFormat
from . import constants
from .content import ContentOptions, check_encoding
from .io.fs import FileSystem, create_app_fs
from .registry import DirectoryManager, FileManager
from .exceptions import (
    ConfigParsingError,
    ConfigFileMissingError,
    ConfigValidationError,
    PathNotFoundError,
)


logger = logging.getLogger(__name__)


class ConfigModel(BaseModel):
    """
        Class Config-Validation Model describe a path manifest
    """
    model_config = ConfigDict(extra="forbid")

    encoding: str = constants.DEFAULT_ENCODING
    newline: str = constants.DEFAULT_NEWLINE
    structured_format: StructuredFormat = StructuredFormat.JSON
    indent: Optional[int] = Field(None, ge=0)
    directories: Dict[str, str] = Field(default_factory=dict)
    files: Dict[str, str] = Field(default_factory=dict)

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, value: str) -> str:
        """Fail on load, not on the first file access, for an unknown encoding"""
        return check_encoding(value)


class Config:
    """
    Loads, validates, and provides access to a path manifest.
    """

    def __init__(self, config_path: str, fs: Optional[FileSystem] = None):
        self.config_path = config_path
        self.fs = fs if fs is not None else create_app_fs()
        self.model = self._load_and_validate()

    def _load_and_validate(self) -> ConfigModel:
        logger.debug(f"Loading manifest from '{self.config_path}'")
        try:
            raw = self.fs.read_text(self.config_path)
        except PathNotFoundError as e:
            raise ConfigFileMissingError(f"Configuration file not found: {self.config_path}") from e

        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as e:
            raise ConfigParsingError(f"Error parsing YAML file '{self.config_path}': {e}") from e

        try:
            model = ConfigModel.model_validate(data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid manifest '{self.config_path}':\n{e}") from e

        logger.debug(
            f"Manifest '{self.config_path}' declares {len(model.directories)} directories "
            f"and {len(model.files)} files"
        )
        return model

    @property
    def directories(self) -> Dict[str, str]:
        return self.model.directories

    @property
    def files(self) -> Dict[str, str]:
        return self.model.files

    def content_options(self) -> ContentOptions:
        return ContentOptions(
            encoding=self.model.encoding,
            newline=self.model.newline,
            structured_format=self.model.structured_format,
            indent=self.model.indent,
        )


def build_managers(config: Config, fs: Optional[FileSystem] = None) -> Tuple[DirectoryManager, FileManager]:
    """
    Create a directory and a file manager seeded from the manifest.

    Each manager gets its own copy of the manifest's mapping.
    """
    fs = fs if fs is not None else config.fs
    directories = DirectoryManager(dict(config.directories), fs=fs)
    files = FileManager(dict(config.files), fs=fs, options=config.content_options())
    return directories, files
