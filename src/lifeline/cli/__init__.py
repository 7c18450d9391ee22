"""
Command-line interface for Lifeline.
"""

from lifeline.cli.main import cli, main

__all__ = ["cli", "main"]
