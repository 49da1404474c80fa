"""Main entry point for the storenav package when run as a module.

This module enables running storenav directly using 'python -m storenav'.
It provides a simple command router to different submodules.
"""

import asyncio
import sys

from . import cli


def main():
    """Main entry point for the package."""
    if len(sys.argv) < 2:
        print("Usage: python -m storenav <command> [args...]")
        print("\nAvailable commands:")
        print("  cli   - Run a single graph or store command")
        print("  serve - Run the navigator server")
        sys.exit(1)

    command = sys.argv.pop(1)  # Remove the command and shift remaining args

    if command == "cli":
        sys.exit(asyncio.run(cli.main()))
    elif command == "serve":
        try:
            sys.exit(asyncio.run(cli.serve()))
        except KeyboardInterrupt:
            sys.exit(0)
    else:
        print(f"Unknown command: {command}")
        print("Available commands: cli, serve")
        sys.exit(1)


if __name__ == "__main__":
    main()
