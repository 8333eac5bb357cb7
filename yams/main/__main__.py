"""
Main module entry point.

This allows running the worker as: python -m yams.main [--beat]
"""

from .worker import main

if __name__ == "__main__":
    main()
