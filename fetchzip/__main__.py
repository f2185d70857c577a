#!/usr/bin/env python3
"""
Main entry point for fetchzip when run as a module.

This allows the package to be executed with: python -m fetchzip
"""

from .cli import main

if __name__ == '__main__':
    main()
