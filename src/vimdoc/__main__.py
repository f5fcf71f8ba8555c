"""
Main entry point for the vimdoc converter when run as a module.
"""

import sys

from vimdoc.vimdoc_cli import main

if __name__ == '__main__':
    sys.exit(main())
