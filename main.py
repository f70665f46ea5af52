#!/usr/bin/env python3
"""Airbike Timer entry point.

Run with:
    python main.py
    python -m airbike
"""

from airbike.__main__ import main


if __name__ == "__main__":
    main()
