#!/usr/bin/env python3
"""
droidsign CLI - Main module entry point.

This allows running the CLI as: python -m droidsign
"""

from droidsign.cli.main import app


def main():
    """Entry point for the droidsign CLI."""
    app(prog_name="droidsign")


if __name__ == "__main__":
    main()
