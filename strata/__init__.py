"""
Strata package initializer.

Strata is the bootstrap core of a modular web framework: it loads the
project configuration, brings the framework subsystems online in order and
composes the router, middleware and security layers of the application.

The package exposes a ``__version__`` attribute indicating the installed
version of Strata, read from the package metadata.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("strata-framework")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
