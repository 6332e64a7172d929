"""
Module execution entry point.

Allows running with: python -m ecsign_cli
"""

from ecsign_cli.cli import main

if __name__ == "__main__":
    main()
