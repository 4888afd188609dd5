"""Mounting and unmounting through the system mount tools."""

from __future__ import annotations

from .command import execute_command


def mount(
    source: str,
    mountpoint: str,
    fstype: str | None = None,
    options: str | None = None,
) -> None:
    """Mount ``source`` on ``mountpoint`` with an optional type and options."""
    args = ["--verbose"]
    if fstype:
        args += ["-t", fstype]
    if options:
        args += ["-o", options]
    args += [source, mountpoint]
    execute_command("mount", *args)


def umount_by_mount_point(mountpoint: str) -> None:
    """Force-unmount whatever is mounted at ``mountpoint``."""
    execute_command("umount", "--force", "--verbose", "--quiet", mountpoint)


def umount_by_device(device: str) -> None:
    """Force-unmount every mount of ``device``, recursively."""
    execute_command("umount", "--force", "--verbose", "--quiet", "--recursive", device)