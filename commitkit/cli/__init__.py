"""Command Line Interface Package"""

from commitkit.cli.main import main

__all__ = ["main"]
