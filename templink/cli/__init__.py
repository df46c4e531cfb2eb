# templink/cli/__init__.py
"""Command line interface for templink."""
from .interface import main_cli_group

__all__ = ["main_cli_group"]
