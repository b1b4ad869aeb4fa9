"""
File system decorators for error handling.

- Handle IO errors consistently (wrap_io_error)
"""

import errno
import functools
import logging

from ..exceptions import (
    EasyPathIOError,
    PathExistsError,
    PathNotFoundError,
    NotAFileError,
    NotADirError,
    DirectoryNotEmptyError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)


def wrap_io_error(func):
    """
    Decorator to wrap IO errors into EasyPath exceptions.

    This decorator catches common file system errors and wraps them
    into EasyPath-specific exception types for consistent error handling.
    Errors that are already EasyPath exceptions pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FileExistsError as e:
            raise PathExistsError(e) from e
        except FileNotFoundError as e:
            raise PathNotFoundError(e) from e
        except IsADirectoryError as e:
            raise NotAFileError(e) from e
        except NotADirectoryError as e:
            raise NotADirError(e) from e
        except PermissionError as e:
            raise PermissionDeniedError(e) from e
        except OSError as e:
            if e.errno == errno.ENOTEMPTY:
                raise DirectoryNotEmptyError(e) from e
            logger.debug(f"Wrapping unclassified OSError from {func.__name__}: {e}")
            raise EasyPathIOError(e) from e

    return wrapper
