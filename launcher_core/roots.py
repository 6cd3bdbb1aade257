"""
Storage root enumeration.

Runtime discovery scans every root returned here. Windows roots are the
drive letters A: to Z:, POSIX roots are the mount points of real storage.
"""

from __future__ import annotations

import logging
import os
import string

from .common import current_system

logger = logging.getLogger(__name__)

PROC_MOUNTS = "/proc/mounts"

# Filesystems that never hold installed software
PSEUDO_FILESYSTEMS = frozenset({
    "autofs", "binfmt_misc", "bpf", "cgroup", "cgroup2", "configfs",
    "debugfs", "devpts", "devtmpfs", "efivarfs", "fusectl", "hugetlbfs",
    "mqueue", "nsfs", "proc", "pstore", "ramfs", "rpc_pipefs", "securityfs",
    "selinuxfs", "squashfs", "sysfs", "tmpfs", "tracefs", "overlay",
})

# Directories commonly holding removable or secondary volumes
VOLUME_DIRS = ("/Volumes", "/media", "/mnt")


def windows_roots() -> list[str]:
    """Enumerate drive roots A:\\ .. Z:\\ in letter order, keeping existing ones."""
    roots = []
    for letter in string.ascii_uppercase:
        root = f"{letter}:\\"
        if os.path.isdir(root):
            roots.append(root)
    return roots


def _decode_mount_path(path: str) -> str:
    # /proc/mounts escapes whitespace and backslashes as octal
    return (
        path.replace("\\040", " ")
        .replace("\\011", "\t")
        .replace("\\012", "\n")
        .replace("\\134", "\\")
    )


def parse_proc_mounts(content: str) -> list[str]:
    """Parse /proc/mounts content into real-storage mount points.

    Args:
        content: Text in fstab format (device, mount point, fs type, ...)

    Returns:
        Mount points in file order, pseudo filesystems and duplicates removed
    """
    mounts: list[str] = []
    for line in content.splitlines():
        fields = line.split()
        if len(fields) < 3:
            continue
        mount_point, fs_type = _decode_mount_path(fields[1]), fields[2]
        if fs_type in PSEUDO_FILESYSTEMS or fs_type.startswith("fuse."):
            continue
        if mount_point not in mounts:
            mounts.append(mount_point)
    return mounts


def _volume_mounts() -> list[str]:
    mounts = []
    for parent in VOLUME_DIRS:
        try:
            names = sorted(os.listdir(parent))
        except OSError:
            continue
        for name in names:
            path = os.path.join(parent, name)
            if os.path.isdir(path) and not os.path.islink(path) and os.path.ismount(path):
                mounts.append(path)
    return mounts


def posix_roots() -> list[str]:
    """Enumerate POSIX storage roots, "/" first.

    Reads /proc/mounts where available, otherwise falls back to the usual
    volume directories (/Volumes, /media, /mnt).
    """
    roots = ["/"]
    try:
        with open(PROC_MOUNTS, "r", encoding="utf-8") as f:
            mounts = parse_proc_mounts(f.read())
    except OSError:
        logger.debug(f"{PROC_MOUNTS} unavailable, scanning volume directories")
        mounts = _volume_mounts()

    for mount in mounts:
        if mount not in roots and os.path.isdir(mount):
            roots.append(mount)
    return roots


def enumerate_roots(system: str | None = None) -> list[str]:
    """Enumerate the storage roots to scan on the given (or current) system.

    Args:
        system: Normalized system name ("windows", "linux", "darwin", ...)

    Returns:
        Ordered list of root directories
    """
    system = system or current_system()
    if system == "windows":
        roots = windows_roots()
    else:
        roots = posix_roots()
    logger.debug(f"Storage roots ({system}): {roots}")
    return roots
