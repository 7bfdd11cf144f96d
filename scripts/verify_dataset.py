#!/usr/bin/env python3
"""List a downloaded set by collector number and check it for duplicate ids.

Usage: python scripts/verify_dataset.py [ecl.json]
"""
from cardset.verify import main

if __name__ == "__main__":
    raise SystemExit(main())
