"""Partition discovery and manipulation through system tools."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from .command import execute_command

ADD_PARTITION_ATTEMPTS = 5


class NoPartitionFoundError(Exception):
    def __init__(self) -> None:
        super().__init__("no partition found after partition creation")


@dataclass
class Partition:
    """A partition as described by both lsblk and partx."""

    lsblk_properties: dict[str, str] = field(default_factory=dict)
    partx_properties: dict[str, str] = field(default_factory=dict)


def _text(out: bytes | str) -> str:
    return out.decode("utf-8", errors="replace") if isinstance(out, bytes) else out


def get_device_path(uuid: str) -> str:
    """Return the device path holding the filesystem with ``uuid``."""
    return _text(execute_command("blkid", "--uuid", uuid)).strip()


def get_partitions(path: str) -> list[Partition]:
    """Return the partitions of a device (e.g. /dev/sda) known to both tools."""
    out = execute_command("lsblk", "--pairs", "--bytes", "--output-all", path)
    lsblk_partitions = parse_lsblk_output(out)
    if not lsblk_partitions:
        return []

    out = execute_command("partx", "--pairs", "--bytes", "--output-all", path)
    partx_partitions = parse_partx_output(out)
    if not partx_partitions:
        return []

    return merge_outputs(lsblk_partitions, partx_partitions)


def probe_partition(device: str) -> None:
    """Tell the operating system about partition table changes."""
    execute_command("partprobe", "-s", device)


def add_partition(root_device: str) -> list[Partition]:
    """Create one partition spanning the device and wait for it to appear."""
    execute_command("parted", "-s", root_device, "mkpart", "primary", "0", "100%")
    probe_partition(root_device)

    for _ in range(ADD_PARTITION_ATTEMPTS):
        partitions = get_partitions(root_device)
        if partitions:
            return partitions
        time.sleep(1)

    raise NoPartitionFoundError()


def create_partition_table(root_device: str) -> None:
    """Write a new GPT partition table."""
    execute_command("parted", "-s", root_device, "mklabel", "gpt")


def format_partition(partition_device: str) -> None:
    """Create an ext4 filesystem with 1% reserved blocks."""
    execute_command("mkfs.ext4", "-v", "-m", "1", "-F", partition_device)


def delete_partition(root_device: str, number: int) -> None:
    """Delete partition ``number`` and re-read the partition table."""
    execute_command("sfdisk", "--delete", root_device, str(number))
    probe_partition(root_device)


def parse_pairs(buf: bytes | str) -> dict[str, str]:
    """Parse whitespace-separated KEY="value" pairs."""
    pairs: dict[str, str] = {}
    for item in _text(buf).split():
        kv = item.split("=")
        if len(kv) != 2:
            continue
        pairs[kv[0]] = kv[1].strip('"')
    return pairs


def _parse_keyed(out: bytes | str, key: str) -> dict[str, dict[str, str]]:
    result: dict[str, dict[str, str]] = {}
    for line in _text(out).split("\n"):
        if not line:
            continue
        pairs = parse_pairs(line)
        ident = pairs.get(key, "")
        if ident:
            result[ident] = pairs
    return result


def parse_partx_output(out: bytes | str) -> dict[str, dict[str, str]]:
    """Index partx --pairs output by partition UUID."""
    return _parse_keyed(out, "UUID")


def parse_lsblk_output(out: bytes | str) -> dict[str, dict[str, str]]:
    """Index lsblk --pairs output by PARTUUID, skipping non-partitions."""
    return _parse_keyed(out, "PARTUUID")


def merge_outputs(
    lsblk_partitions: dict[str, dict[str, str]],
    partx_partitions: dict[str, dict[str, str]],
) -> list[Partition]:
    """Pair partitions that appear in both outputs."""
    return [
        Partition(lsblk_properties=lsblk_partitions[uuid], partx_properties=partx)
        for uuid, partx in partx_partitions.items()
        if uuid in lsblk_partitions
    ]