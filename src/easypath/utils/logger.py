# logger.py
import logging
import sys
import os

import colorlog

from .. import constants

_CONSOLE_FORMAT = '[%(levelname).4s] %(name)s: %(message)s'
_FILE_FORMAT = '%(asctime)s ' + _CONSOLE_FORMAT

_LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def setup_logger(debug: bool = False, module_levels: dict | None = None, log_file: str | None = None):
    """
    Configure the root logger for the easypath CLI.

    Handlers are installed on the first call only; later calls just adjust
    the root and per-module levels.

    Args:
        debug: Log at DEBUG instead of INFO
        module_levels: Per-module levels, e.g. ``{"reg": "DEBUG"}``
        log_file: Also write every record to this file
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    if not root.handlers:
        root.addHandler(_console_handler())
        if log_file:
            _add_file_handler(root, log_file)

    _apply_module_levels(module_levels)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    # https://no-color.org/
    if sys.stderr.isatty() and not os.environ.get("NO_COLOR"):
        handler.setFormatter(colorlog.ColoredFormatter(
            '%(log_color)s' + _CONSOLE_FORMAT, log_colors=_LOG_COLORS,
        ))
    else:
        handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _add_file_handler(root: logging.Logger, log_file: str):
    try:
        handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    except OSError as e:
        root.error(f"Can not open log file '{log_file}': {e}")
        return
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    root.addHandler(handler)
    root.info(f"Logging to file: {log_file}")


def parse_module_levels(levels: str) -> dict:
    """Parse ``"reg=DEBUG,io=INFO"`` into ``{"reg": "DEBUG", "io": "INFO"}``."""
    module_levels = {}
    for pair in levels.split(','):
        pair = pair.strip()
        if not pair or '=' not in pair:
            continue
        name, lvl = pair.split('=', 1)
        module_levels[name.strip()] = lvl.strip().upper()
    return module_levels


def _apply_module_levels(module_levels: dict | None):
    """Apply per-module logger levels from mapping or env var EASYPATH_LOG_LEVELS.

    module_levels format: {"easypath.registry": "DEBUG", "fs": "INFO"}
    Env var example: EASYPATH_LOG_LEVELS="reg=DEBUG,io.fs=INFO"
    """
    if module_levels is None:
        env = os.environ.get(constants.LOG_LEVELS_ENV)
        if env:
            module_levels = parse_module_levels(env)

    if not module_levels:
        return

    for name, lvl_str in module_levels.items():
        lvl = getattr(logging, lvl_str.upper(), None)
        if not isinstance(lvl, int):
            # Invalid levels are ignored rather than crashing startup
            continue
        logging.getLogger(normalize_module_name(name)).setLevel(lvl)


def normalize_module_name(name: str) -> str:
    """Normalize provided module name with alias and auto-prefix.

    - If name is an alias, expand to full module path.
    - If name ends with '.*', treat it as base logger (strip the wildcard).
    - If name does not start with 'easypath.' and begins with a known top module, prefix 'easypath.'.
    """
    if name in constants.LOG_ALIAS_MAP:
        return constants.LOG_ALIAS_MAP[name]
    if name.endswith('.*'):
        name = name[:-2]
    if not name.startswith('easypath.'):
        first = name.split('.', 1)[0]
        if first in constants.KNOWN_TOP_MODULES:
            name = f'easypath.{name}'
    return name
