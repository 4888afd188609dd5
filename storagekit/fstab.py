"""Reading and editing an fstab file."""

from __future__ import annotations

import functools
import os
import re
import shutil
from dataclasses import dataclass
from typing import Iterator

PASS_DO_NOT_CHECK = 0
PASS_CHECK_DURING_BOOT = 1
PASS_CHECK_AFTER_BOOT = 2

DEFAULT_PATH = "/etc/fstab"

_BACKUP_SUFFIX = ".casaos.bak"
_NEW_SUFFIX = ".casaos.new"
_ADDED_MARK = "\t# Added by the CasaOS\n"
_INTEGER = re.compile(r"[+-]?[0-9]+")


class FStabError(Exception):
    """Base class for fstab errors."""


class InvalidFStabEntryError(FStabError, ValueError):
    def __init__(self) -> None:
        super().__init__("invalid fstab entry")


class DifferentFStabEntryError(FStabError):
    def __init__(self) -> None:
        super().__init__(
            "a different fstab entry with the same mount point already exists"
        )


@dataclass
class Entry:
    """One line of an fstab file."""

    source: str
    mount_point: str
    fs_type: str
    options: str
    dump: int = 0
    pass_number: int = PASS_DO_NOT_CHECK

    def __str__(self) -> str:
        return "\t".join(
            (
                self.source,
                self.mount_point,
                self.fs_type,
                self.options,
                str(self.dump),
                str(self.pass_number),
            )
        )


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise InvalidFStabEntryError()
    return int(text)


def parse_entry(line: str) -> Entry | None:
    """Parse one fstab line; blank lines, comments and short lines give None."""
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    fields = line.split()
    if len(fields) < 4:
        return None
    entry = Entry(fields[0], fields[1], fields[2], fields[3])
    if len(fields) > 4:
        entry.dump = _atoi(fields[4])
    if len(fields) > 5:
        entry.pass_number = _atoi(fields[5])
    return entry


class FStab:
    """An fstab file at a given path."""

    def __init__(self, path: str = DEFAULT_PATH) -> None:
        self.path = path

    def _lines(self) -> Iterator[str]:
        with open(self.path, encoding="utf-8", newline="\n") as fh:
            for raw in fh:
                line = raw[:-1] if raw.endswith("\n") else raw
                if line.endswith("\r"):
                    line = line[:-1]
                yield line

    def _backup(self) -> None:
        shutil.copyfile(self.path, self.path + _BACKUP_SUFFIX)

    def add(self, entry: Entry, replace: bool = False) -> None:
        """Append an entry, replacing one with the same mount point.

        Without ``replace`` an existing entry that differs raises
        :class:`DifferentFStabEntryError`.
        """
        existing = self.get_entry_by_mount_point(entry.mount_point)
        if existing is not None:
            if not replace and existing != entry:
                raise DifferentFStabEntryError()
            self.remove_by_mount_point(entry.mount_point, False)

        self._backup()
        with open(self.path, "a", encoding="utf-8") as fh:
            fh.write(str(entry) + _ADDED_MARK)

    def remove_by_mount_point(self, mountpoint: str, comment: bool = False) -> None:
        """Drop (or, with ``comment``, comment out) entries for a mount point."""
        new_path = self.path + _NEW_SUFFIX
        with open(new_path, "w", encoding="utf-8") as out:
            for line in self._lines():
                try:
                    entry = parse_entry(line)
                except InvalidFStabEntryError:
                    entry = None
                if entry is not None and entry.mount_point == mountpoint:
                    if comment:
                        out.write("#" + line + "\n")
                    continue
                out.write(line + "\n")
        self._backup()
        os.replace(new_path, self.path)

    def get_entries(self) -> list[Entry]:
        """Return every entry; a malformed line raises InvalidFStabEntryError."""
        return [entry for entry in map(parse_entry, self._lines()) if entry is not None]

    def get_entry_by_mount_point(self, mountpoint: str) -> Entry | None:
        return next((e for e in self.get_entries() if e.mount_point == mountpoint), None)

    def get_entry_by_source(self, source: str) -> Entry | None:
        return next((e for e in self.get_entries() if e.source == source), None)


@functools.lru_cache(maxsize=None)
def get() -> FStab:
    """Return the shared instance for the system fstab."""
    return FStab(DEFAULT_PATH)