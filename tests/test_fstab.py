import os

import pytest

from storagekit.fstab import (
    DEFAULT_PATH,
    PASS_DO_NOT_CHECK,
    DifferentFStabEntryError,
    Entry,
    FStab,
    InvalidFStabEntryError,
    get,
    parse_entry,
)

FSTAB_CONTENT = """
\t# UNCONFIGURED FSTAB FOR BASE SYSTEM
\tLABEL=UEFI      /boot/efi       vfat    umask=0077      0 1
\t/mnt/sdb:/mnt/sdc       /media  mergerfs        defaults,allow_other,category.create=mfs,moveonenospc=true,minfreespace=1M 0 0
\tLABEL=desktop-rootfs    /               ext4    defaults        0 1
"""

MEDIA_OPTIONS = "defaults,allow_other,category.create=mfs,moveonenospc=true,minfreespace=1M"


@pytest.fixture
def fstab(tmp_path):
    path = tmp_path / "fstab"
    path.write_text(FSTAB_CONTENT)
    return FStab(str(path))


def _check_media(entry):
    assert entry.source == "/mnt/sdb:/mnt/sdc"
    assert entry.mount_point == "/media"
    assert entry.fs_type == "mergerfs"
    assert entry.options == MEDIA_OPTIONS
    assert entry.dump == 0
    assert entry.pass_number == PASS_DO_NOT_CHECK


def test_fstab_round_trip(fstab):
    entries = fstab.get_entries()
    assert len(entries) == 3

    entry = fstab.get_entry_by_mount_point("/media")
    _check_media(entry)

    fstab.remove_by_mount_point(entry.mount_point, False)
    assert fstab.get_entry_by_mount_point(entry.mount_point) is None

    fstab.add(entry, True)
    _check_media(fstab.get_entry_by_mount_point(entry.mount_point))


def test_get_entry_by_source(fstab):
    entry = fstab.get_entry_by_source("LABEL=UEFI")
    assert entry.mount_point == "/boot/efi"
    assert entry.pass_number == 1
    assert fstab.get_entry_by_source("LABEL=missing") is None


def test_add_conflicting_entry_without_replace(fstab):
    other = Entry("LABEL=other", "/media", "ext4", "defaults")
    with pytest.raises(DifferentFStabEntryError):
        fstab.add(other, False)
    _check_media(fstab.get_entry_by_mount_point("/media"))


def test_add_replace_overwrites(fstab):
    other = Entry("LABEL=other", "/media", "ext4", "defaults")
    fstab.add(other, True)
    assert fstab.get_entry_by_mount_point("/media") == other
    assert len(fstab.get_entries()) == 3


def test_add_writes_backup_and_marker(fstab):
    entry = Entry("LABEL=new", "/mnt/new", "ext4", "defaults", 0, 2)
    fstab.add(entry)
    with open(fstab.path) as fh:
        assert fh.read().endswith(str(entry) + "\t# Added by the CasaOS\n")
    assert os.path.exists(fstab.path + ".casaos.bak")


def test_remove_with_comment(fstab):
    fstab.remove_by_mount_point("/media", True)
    assert fstab.get_entry_by_mount_point("/media") is None
    with open(fstab.path) as fh:
        text = fh.read()
    assert "#\t/mnt/sdb:/mnt/sdc" in text
    assert len(fstab.get_entries()) == 2


def test_entry_str():
    entry = Entry("src", "/mnt", "ext4", "defaults", 0, 2)
    assert str(entry) == "src\t/mnt\text4\tdefaults\t0\t2"
    assert parse_entry(str(entry)) == entry


def test_parse_entry_skips_comments_and_short_lines():
    assert parse_entry("") is None
    assert parse_entry("   # comment") is None
    assert parse_entry("a b c") is None


def test_parse_entry_defaults():
    assert parse_entry("a /b ext4 rw") == Entry("a", "/b", "ext4", "rw", 0, 0)


def test_parse_entry_invalid_numbers():
    with pytest.raises(InvalidFStabEntryError):
        parse_entry("a /b ext4 rw x")
    with pytest.raises(InvalidFStabEntryError):
        parse_entry("a /b ext4 rw 0 y")


def test_get_entries_raises_on_invalid_line(tmp_path):
    path = tmp_path / "fstab"
    path.write_text("a /b ext4 rw bad\n")
    with pytest.raises(InvalidFStabEntryError):
        FStab(str(path)).get_entries()


def test_get_returns_shared_default():
    assert get() is get()
    assert get().path == DEFAULT_PATH