"""
__main__.py

This file adds support for running flowy as a python module ("python -m flowy") instead
of invoking the "flowy" command line entrypoint.
"""

from flowy.cli import main


if __name__ == "__main__":
    main()
