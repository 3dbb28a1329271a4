"""
Entry point for running ssrfstats as a module.

Allows running with: python -m ssrfstats
"""

from ssrfstats.cli import main

if __name__ == "__main__":
    main()
