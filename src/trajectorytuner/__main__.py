"""
Run with: python -m trajectorytuner
"""
import sys

from trajectorytuner.main import main

if __name__ == "__main__":
    sys.exit(main())
