"""Installed distribution version."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("calais-client")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"
