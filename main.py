#!/usr/bin/env python3
"""
Zion - visual git client

This is a convenience wrapper for running from the repo root.
The actual entry point is zion.main:main (for pip install).
"""

from zion.main import main

if __name__ == "__main__":
    main()
