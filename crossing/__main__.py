"""Run Crossing with ``python -m crossing``."""
import sys

from crossing.main import main

if __name__ == "__main__":
    sys.exit(main())
