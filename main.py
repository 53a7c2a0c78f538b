#!/usr/bin/env python3
"""JudoTimer: entry point.

Run with:
    python main.py
    python -m judotimer
"""

from judotimer.__main__ import main


if __name__ == "__main__":
    main()
