"""
Version information for the sBTC payment-link SDK.

Installed copies report the distribution metadata; a source checkout reads
``pyproject.toml`` next to the package.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION = "sbtc-paylink"
DEFAULT_VERSION = "0.1.0"


def _version_from_pyproject() -> str:
    path = pathlib.Path(__file__).parent.parent / "pyproject.toml"
    try:
        with open(path, "rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return DEFAULT_VERSION


try:
    __version__ = importlib.metadata.version(DISTRIBUTION)
except importlib.metadata.PackageNotFoundError:
    __version__ = _version_from_pyproject()
