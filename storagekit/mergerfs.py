"""Controlling a mergerfs pool through its control file's extended attributes."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

BRANCHES_KEY = "user.mergerfs.branches"
SRCMOUNTS_KEY = "user.mergerfs.srcmounts"

MERGERFS_PATHS = (
    "/sbin/mount.mergerfs",
    "/usr/sbin/mount.mergerfs",
    "/usr/local/sbin/mount.mergerfs",
    "/bin/mount.mergerfs",
    "/usr/bin/mount.mergerfs",
    "/usr/local/bin/mount.mergerfs",
)


def control_file(fspath: str) -> str:
    """Return the path of the pool's control file."""
    return os.path.join(fspath, ".mergerfs")


def list_values(fspath: str) -> dict[str, str]:
    """Return every extended attribute of the control file."""
    ctrl = control_file(fspath)
    return {
        key: os.getxattr(ctrl, key).decode("utf-8", errors="replace")
        for key in os.listxattr(ctrl)
        if key
    }


def set_source(fspath: str, sources: list[str]) -> None:
    """Replace the pool's branches with ``sources``, dropping duplicates."""
    value = ":".join(dict.fromkeys(sources)).encode()
    try:
        os.setxattr(control_file(fspath), BRANCHES_KEY, value, 0)
    except OSError:
        logger.exception("SetSource")
        raise


def get_source(fspath: str) -> list[str]:
    """Return the pool's source mounts."""
    return list_values(fspath).get(SRCMOUNTS_KEY, "").split(":")


def add_source(fspath: str, source: str) -> None:
    """Add one branch to the pool."""
    os.setxattr(control_file(fspath), BRANCHES_KEY, ("+" + source).encode(), 0)


def remove_source(fspath: str, source: str) -> None:
    """Remove one branch from the pool."""
    os.setxattr(control_file(fspath), BRANCHES_KEY, ("-" + source).encode(), 0)


def add_path(fspath: str, path: str) -> None:
    """Add a branch, addressing the pool by its control file."""
    add_source(control_file(fspath), path)


def remove_path(fspath: str, path: str) -> None:
    """Remove a branch, addressing the pool by its control file."""
    remove_source(control_file(fspath), path)


def is_mergerfs_installed() -> bool:
    """Tell whether mount.mergerfs exists at any of the usual locations."""
    for path in MERGERFS_PATHS:
        try:
            os.stat(path)
        except OSError:
            continue
        logger.info("mergerfs is installed at %s", path)
        return True
    logger.error("mergerfs is not installed at any path: %s", ", ".join(MERGERFS_PATHS))
    return False