"""
Entry point for python -m sio_emitter
"""
import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
