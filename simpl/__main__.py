"""Entry point for the Simpl CLI.

This module serves as the main entry point when running the simpl package directly.
"""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
