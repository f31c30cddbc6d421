"""
Entry point for running pdf_instructions as a module.

Usage:
    python -m pdf_instructions render document.json --format pdf -o out.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
