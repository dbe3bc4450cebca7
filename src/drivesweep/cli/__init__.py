"""
drivesweep CLI module.

This module provides the command-line interface for drivesweep.
"""

from drivesweep.cli.main import cli, main

__all__ = ["cli", "main"]
