"""
Tests for storage root enumeration (launcher_core/roots.py).
"""

import string
from unittest.mock import patch, mock_open

from launcher_core.roots import (
    enumerate_roots,
    parse_proc_mounts,
    posix_roots,
    windows_roots,
)


PROC_MOUNTS_SAMPLE = """\
overlay / overlay rw,relatime 0 0
proc /proc proc rw,nosuid,nodev,noexec,relatime 0 0
tmpfs /dev tmpfs rw,nosuid,size=65536k,mode=755 0 0
sysfs /sys sysfs ro,nosuid,nodev,noexec,relatime 0 0
/dev/nvme0n1p2 / ext4 rw,relatime 0 0
/dev/nvme0n1p1 /boot/efi vfat rw,relatime 0 0
/dev/sda1 /mnt/Games\\040Drive ext4 rw,relatime 0 0
/dev/sda1 /mnt/Games\\040Drive ext4 rw,relatime 0 0
cgroup2 /sys/fs/cgroup cgroup2 rw 0 0
gvfsd-fuse /run/user/1000/gvfs fuse.gvfsd-fuse rw 0 0
"""


class TestWindowsRoots:
    """Tests for drive letter enumeration."""

    def test_letters_in_order(self):
        """Test that all 26 letters are checked in order and existing ones kept."""
        checked = []

        def isdir(path):
            checked.append(path)
            return path in ("C:\\", "D:\\", "Z:\\")

        with patch("launcher_core.roots.os.path.isdir", side_effect=isdir):
            roots = windows_roots()

        assert roots == ["C:\\", "D:\\", "Z:\\"]
        assert checked == [f"{letter}:\\" for letter in string.ascii_uppercase]

    def test_no_drives(self):
        """Test empty result when no drive exists."""
        with patch("launcher_core.roots.os.path.isdir", return_value=False):
            assert windows_roots() == []


class TestParseProcMounts:
    """Tests for /proc/mounts parsing."""

    def test_filters_pseudo_filesystems(self):
        """Test that only real storage remains, deduplicated and decoded."""
        assert parse_proc_mounts(PROC_MOUNTS_SAMPLE) == [
            "/",
            "/boot/efi",
            "/mnt/Games Drive",
        ]

    def test_ignores_short_lines(self):
        """Test malformed lines are skipped."""
        assert parse_proc_mounts("garbage\n\n/dev/sdb1 /data xfs rw 0 0\n") == ["/data"]


class TestPosixRoots:
    """Tests for POSIX root enumeration."""

    def test_root_first_then_mounts(self):
        """Test that / leads and mounts follow in file order."""
        with patch("builtins.open", mock_open(read_data=PROC_MOUNTS_SAMPLE)), \
             patch("launcher_core.roots.os.path.isdir", return_value=True):
            roots = posix_roots()

        assert roots == ["/", "/boot/efi", "/mnt/Games Drive"]

    def test_missing_mounts_are_dropped(self):
        """Test that mount points that are not directories are skipped."""
        with patch("builtins.open", mock_open(read_data=PROC_MOUNTS_SAMPLE)), \
             patch("launcher_core.roots.os.path.isdir", side_effect=lambda p: p != "/boot/efi"):
            roots = posix_roots()

        assert roots == ["/", "/mnt/Games Drive"]

    def test_fallback_without_proc_mounts(self):
        """Test fallback to volume directories when /proc/mounts is unreadable."""
        with patch("builtins.open", side_effect=OSError("no procfs")), \
             patch("launcher_core.roots._volume_mounts", return_value=["/Volumes/External"]), \
             patch("launcher_core.roots.os.path.isdir", return_value=True):
            roots = posix_roots()

        assert roots == ["/", "/Volumes/External"]


class TestEnumerateRoots:
    """Tests for platform dispatch."""

    def test_windows_dispatch(self):
        """Test Windows uses drive letters."""
        with patch("launcher_core.roots.windows_roots", return_value=["C:\\"]) as mock_win, \
             patch("launcher_core.roots.posix_roots") as mock_posix:
            assert enumerate_roots("windows") == ["C:\\"]
        mock_win.assert_called_once()
        mock_posix.assert_not_called()

    def test_posix_dispatch(self):
        """Test Linux and macOS use mount points."""
        with patch("launcher_core.roots.posix_roots", return_value=["/"]) as mock_posix:
            assert enumerate_roots("linux") == ["/"]
            assert enumerate_roots("darwin") == ["/"]
        assert mock_posix.call_count == 2

    def test_current_system_default(self):
        """Test that the current system is used when none is given."""
        with patch("launcher_core.roots.current_system", return_value="windows"), \
             patch("launcher_core.roots.windows_roots", return_value=["C:\\"]):
            assert enumerate_roots() == ["C:\\"]
