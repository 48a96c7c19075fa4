"""CLI entry point for promptcraft.

Usage:
    python -m promptcraft "Create a login page" --mode deep
"""

from promptcraft.cli import main

if __name__ == "__main__":
    main()
