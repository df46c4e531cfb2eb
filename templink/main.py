# templink/main.py
"""Main entry point for the templink CLI application."""

from templink.cli.interface import main_cli_group


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli_group(prog_name="templink")

if __name__ == '__main__':
    entrypoint()
