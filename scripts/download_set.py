#!/usr/bin/env python3
"""Download one set's card data and images.

Usage: python scripts/download_set.py tla
"""
from cardset.main import main

if __name__ == "__main__":
    raise SystemExit(main())
