"""Entry point for ``python -m fundraising_export``"""
import sys

from fundraising_export.cli import main

if __name__ == "__main__":
    sys.exit(main())
