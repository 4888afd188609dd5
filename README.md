# storagekit

Building blocks for managing local storage on a Linux host:

- **`storagekit.fstab`**: read, add, replace and remove entries in an fstab
  file. A `.casaos.bak` copy of the file is written before every change.
- **`storagekit.partition`**: discover partitions by merging `lsblk` and `partx`
  output. It also creates partition tables and adds, formats and deletes
  partitions.
- **`storagekit.mount`**: wrappers around `mount` and `umount`.
- **`storagekit.mergerfs`**: inspect and change the branches of a running
  mergerfs pool through the extended attributes of its `.mergerfs` control
  file, and check whether `mount.mergerfs` is installed.
- **`storagekit.command`**: run external programs, shell commands, `smartctl`
  and `lsblk`.
- **`storagekit.config`**: load and save the INI configuration file with its
  `common`, `app` and `server` sections.
- **`storagekit.sign`**: HMAC-SHA256 signatures that carry an expiry time.
- **`storagekit.cache`**: `ExpiringCache`, an in-memory cache with per-entry
  expiry and a background cleanup thread.
- **`storagekit.sync_map`**: `SyncMap`, a lock-guarded map.
- **`storagekit.singleflight`**: `Group`, which suppresses duplicate
  concurrent calls.
- **`storagekit.paths`**: path cleaning, comparison, encoding and joining.
- **`storagekit.helpers`**: small utilities for flags, sequences, China
  Standard Time parsing and debouncing.
- **`storagekit.encryption`**: MD5 hex digests.
- **`storagekit.drive`**: dataclasses for remote mount listings, each with
  `from_dict` and `to_dict` methods.

The package has no third-party dependencies. The disk modules call the usual
system tools: `mount`, `umount`, `lsblk`, `partx`, `parted`, `partprobe`,
`sfdisk`, `mkfs.ext4`, `blkid` and `smartctl`. Most of these need root
privileges. The mergerfs functions use `os.getxattr` and `os.setxattr`, which
are available only on Linux.

## Installation

```
pip install storagekit
```

To run the test suite:

```
pip install "storagekit[test]"
pytest
```

## Examples

### Paths

```python
from storagekit.paths import fix_and_clean_path, is_sub_path, join_base_path

fix_and_clean_path("..")                  # "/"
fix_and_clean_path("a\\b//c")             # "/a/b/c"
is_sub_path("/media", "/media/disk1")     # True
join_base_path("/media", "disk1/photos")  # "/media/disk1/photos"
join_base_path("/media", "../etc")        # raises ValueError
```

### Reading and editing fstab

```python
from storagekit import fstab

table = fstab.get()  # shared FStab for /etc/fstab
for entry in table.get_entries():
    print(entry)     # tab-separated fstab line

media = table.get_entry_by_mount_point("/media")
if media is not None:
    table.remove_by_mount_point("/media", comment=True)
```

`FStab.add(entry, replace)` appends an entry. If another entry already uses the
same mount point and differs from the new one, `DifferentFStabEntryError` is
raised, unless `replace` is true. Dump or pass fields that are not integers
raise `InvalidFStabEntryError`. Both errors are subclasses of `FStabError`.

### Partitions

```python
from storagekit.partition import get_partitions

for part in get_partitions("/dev/sdb"):
    print(part.lsblk_properties["PATH"], part.partx_properties["NR"])
```

`parse_lsblk_output`, `parse_partx_output` and `merge_outputs` work on captured
`--pairs` output without running anything. `add_partition(root_device)` creates
one partition spanning the whole disk and polls for it five times. If it never
appears, `NoPartitionFoundError` is raised.

### Mounting

```python
from storagekit.mount import mount, umount_by_mount_point

mount("/dev/sdb1", "/media/disk1", "ext4", "defaults")
umount_by_mount_point("/media/disk1")
```

A failing tool raises `storagekit.command.CommandError`. The error message is
the tool's standard error output.

### mergerfs

```python
from storagekit.mergerfs import add_source, get_source, is_mergerfs_installed

if is_mergerfs_installed():
    add_source("/DATA", "/media/disk2")
    print(get_source("/DATA"))
```

### Signed values

```python
import time
from storagekit.sign import new_hmac_sign

signer = new_hmac_sign(b"secret")
signature = signer.sign("/files/report.pdf", int(time.time()) + 3600)
signer.verify("/files/report.pdf", signature)  # returns None when valid
```

When a signature fails, `verify` raises one of the following. All of them are
subclasses of `SignError`:

- `SignExpiredError`
- `SignInvalidError`
- `ExpireInvalidError`
- `ExpireMissingError`

An expiry of `0` never expires.

### Configuration

```python
from storagekit.config import LocalStorageConfig

sample_text = "[server]\nUSBAutoMount = True\nEnableMergerFS = False\n"

config = LocalStorageConfig()
config.init_setup("/tmp/local-storage.conf", sample_text)
config.server.enable_merger_fs = "true"
config.save_setup("/tmp/local-storage.conf")
```

If the file does not exist, `init_setup` first writes the sample text to it.
`save_setup` keeps any other keys in the document. With an empty path, both
methods use `/etc/casaos/local-storage.conf`.

### Concurrency helpers

```python
from storagekit.singleflight import Group
from storagekit.sync_map import SyncMap

group = Group()
value, shared = group.do("lsblk", expensive_scan)  # concurrent callers share one run
future = group.do_future("lsblk", expensive_scan)  # resolves to a Result

seen = SyncMap()
seen.store("/dev/sdb", "busy")
seen.has("/dev/sdb")  # True
```

## What it does not do

storagekit is a library only:

- It has no command-line program.
- It has no HTTP API or server.
- It has no database of volumes or merges.
- It has no FUSE or cloud-drive mounting.
- It does not watch for devices being plugged in.

A service that offers these things has to build them on top of the modules
above.