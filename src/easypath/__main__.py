"""
EasyPath - Main entry point

This module delegates to cli.py so the package runs with ``python -m easypath``.
"""

from .cli import cli

if __name__ == "__main__":
    cli()
