#!/usr/bin/env python3
"""Debate Timer: entry point.

Run with:
    python main.py
    python -m debatetimer
"""

from debatetimer.__main__ import main


if __name__ == "__main__":
    main()
