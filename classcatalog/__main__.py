"""
Package entry point.

Allows running the scraper via:

    python -m classcatalog

This simply forwards execution to classcatalog.cli.main().
"""

from classcatalog.cli import main

if __name__ == "__main__":
    main()
