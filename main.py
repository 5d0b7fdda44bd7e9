"""
vec2x - Main Entry Point
"""
import sys

from vec2x.cli import main


if __name__ == "__main__":
    sys.exit(main())
