"""
Version of the shapeshare generator.

The version is stamped into the header of every generated file, so an
editable checkout reports the version declared in its own pyproject.toml
rather than whatever distribution metadata happens to be installed.
"""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION = "shapeshare"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _checkout_version() -> str | None:
    """Version declared by the source checkout, if running from one."""
    if not _PYPROJECT.is_file():
        return None
    with _PYPROJECT.open("rb") as f:
        project = tomllib.load(f).get("project", {})
    if project.get("name") != DISTRIBUTION:
        return None
    return project.get("version")


def get_version() -> str:
    """Version string written into generated file headers."""
    checkout = _checkout_version()
    if checkout:
        return checkout
    try:
        return _metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
