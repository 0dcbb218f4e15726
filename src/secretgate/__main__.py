#!/usr/bin/env python3
"""
Allow running secretgate as a module: python -m secretgate
"""

from secretgate.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
