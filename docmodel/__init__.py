"""docmodel - class model resolution for document mapping."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("docmodel")
except PackageNotFoundError:
    __version__ = "(local)"
