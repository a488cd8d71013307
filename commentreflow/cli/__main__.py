"""
Main entry point for the comment reflow CLI when run as a module.

This allows the CLI to be executed using:
    python -m commentreflow.cli

or the equivalent console script entry point.
"""

from . import main

if __name__ == '__main__':
    main()
