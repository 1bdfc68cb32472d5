#!/usr/bin/env python3
"""CircuitTimer — entry point.

Run with:
    python main.py --preset tabata
    python -m circuittimer --preset tabata
"""

import sys

from circuittimer.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
