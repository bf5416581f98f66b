"""
cursorgen - generate key-addressable state cursors from TypeScript state declarations.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cursorgen")
except PackageNotFoundError:
    # Running from a source checkout that was never installed.
    __version__ = "0.0.0"

__all__ = ["__version__"]
