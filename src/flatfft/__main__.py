"""
Command-line entry for the flatfft package.

Usage
-----
$ python -m flatfft selftest
"""

from .cli.flatfft_cli import main

if __name__ == "__main__":
    raise SystemExit(main())
