"""secretgate package metadata."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("secretgate")
except PackageNotFoundError:
    __version__ = "0.0.1"
