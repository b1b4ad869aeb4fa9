import functools
import click
import logging
import traceback

from .config import Config, build_managers
from .utils import setup_logger, parse_module_levels
from .io import create_app_fs
from .exceptions import (
    EasyPathError,
    ConfigurationError,
    RegistryError,
    EasyPathIOError,
)
from . import __version__


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    module_levels = parse_module_levels(log_levels) if log_levels else None
    setup_logger(debug=debug, module_levels=module_levels, log_file=log_file)


def handle_errors(func):
    """Decorator to handle common exceptions"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _report(f"Configuration error: {e}")
        except RegistryError as e:
            _report(f"Registry error: {e}")
        except EasyPathIOError as e:
            _report(f"Filesystem error: {e}")
        except EasyPathError as e:
            _report(f"An unexpected application error occurred: {e}")
    return wrapper


def _report(message: str):
    logging.error(message)
    ctx = click.get_current_context()
    if ctx.obj and ctx.obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


def load_managers(manifest: str, vfs: bool = False):
    """Load a manifest and build its directory and file managers"""
    cli_fs = create_app_fs(use_vfs=vfs)
    config = Config(manifest, create_app_fs())
    return build_managers(config, cli_fs)


@handle_errors
def do_init(manifest: str, vfs: bool):
    """Execute init command"""
    directories, files = load_managers(manifest, vfs)
    directories.create_paths()
    files.create_paths()
    logging.info(f"Ensured {len(directories)} directories and {len(files)} files from '{manifest}'")


@handle_errors
def do_status(manifest: str):
    """Execute status command"""
    directories, files = load_managers(manifest)
    click.echo(f"{'KIND':<10} {'KEY':<24} {'EXISTS':<8} PATH")
    click.echo("-" * 72)
    for manager in (directories, files):
        for key, path in manager.paths.items():
            state = "yes" if manager.exists(key) else "no"
            click.echo(f"{manager.kind:<10} {key:<24} {state:<8} {path}")


@handle_errors
def do_path(manifest: str, key: str, directory: bool):
    """Execute path command"""
    directories, files = load_managers(manifest)
    manager = directories if directory else files
    click.echo(manager.get_path(key))


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'reg=DEBUG,fs=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='easypath')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """EasyPath - Manage keyed directories and files from a manifest

    \b
    Examples:
      easypath init paths.yml          Create every declared directory and file
      easypath status paths.yml        Show which declared paths exist
      easypath path paths.yml logs -d  Print the directory registered as 'logs'
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@click.argument('manifest', type=click.Path(dir_okay=False))
@click.option('--vfs', is_flag=True, help='Dry run: create the paths in an in-memory filesystem')
@click.pass_context
def init(ctx, manifest, vfs):
    """Create the declared directories, then the declared files"""
    do_init(manifest, vfs)


@cli.command()
@click.argument('manifest', type=click.Path(dir_okay=False))
@click.pass_context
def status(ctx, manifest):
    """List every declared key with its path and whether it exists"""
    do_status(manifest)


@cli.command()
@click.argument('manifest', type=click.Path(dir_okay=False))
@click.argument('key')
@click.option('-d', '--directory', is_flag=True, help='Look the key up among directories instead of files')
@click.pass_context
def path(ctx, manifest, key, directory):
    """Print the path registered for KEY"""
    do_path(manifest, key, directory)
