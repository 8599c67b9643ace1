from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from .constants import EditorConstants

FALLBACK_VERSION = "1.0.0"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]


def _package_version() -> str:
    try:
        return importlib.metadata.version(EditorConstants.PROGRAM_NAME)
    except importlib.metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def _from_git_repo() -> Optional[BuildInfo]:
    here = Path(__file__).resolve().parent
    try:
        commit = subprocess.check_output(
            ["git", "rev-parse", "HEAD"], cwd=str(here), stderr=subprocess.DEVNULL
        ).decode().strip()
        date = subprocess.check_output(
            ["git", "show", "-s", "--format=%cI", "HEAD"], cwd=str(here), stderr=subprocess.DEVNULL
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return BuildInfo(commit=commit or None, date=date or None)


def _from_embedded_file() -> Optional[BuildInfo]:
    # Generated at build time by hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    date = getattr(_build_info, "DATE", None)
    if commit or date:
        return BuildInfo(commit=commit, date=date)
    return None


def get_build_info() -> BuildInfo:
    # Priority: embedded file -> live git repo -> unknowns
    for getter in (_from_embedded_file, _from_git_repo):
        info = getter()
        if info and (info.commit or info.date):
            return info
    return BuildInfo(commit=None, date=None)


def get_version_string() -> str:
    info = get_build_info()
    version = f"{EditorConstants.PROGRAM_NAME} {_package_version()}"
    if info.commit:
        version += f" ({info.commit[:7]}"
        if info.date:
            version += f" {info.date}"
        version += ")"
    return version
