"""AI commit message suggestions for git working trees."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("gitmessage")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
