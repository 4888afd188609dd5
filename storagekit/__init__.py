"""Local storage management: fstab, partitions, mounts, mergerfs, configuration and supporting utilities."""

__version__ = "0.1.0"