"""Command-line interface for glyphmesh.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Summary of vertices, faces and side walls written
- Verbose/quiet output modes
- Report of degenerate loops removed per path
- Detailed error reporting
"""

from glyphmesh.cli.app import cli, main

__all__ = ["cli", "main"]
