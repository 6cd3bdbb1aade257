"""
Shared fixtures for launcher_core tests.
"""

import os
import stat
from pathlib import Path

import pytest

from launcher_core.manifest import CURRENT_MANIFEST


OPENJDK_21_OUTPUT = (
    'openjdk version "21.0.4" 2024-07-16 LTS\n'
    "OpenJDK Runtime Environment Temurin-21.0.4+7 (build 21.0.4+7-LTS)\n"
    "OpenJDK 64-Bit Server VM Temurin-21.0.4+7 (build 21.0.4+7-LTS, mixed mode, sharing)\n"
)

JAVA_8_32BIT_OUTPUT = (
    'java version "1.8.0_401"\n'
    "Java(TM) SE Runtime Environment (build 1.8.0_401-b10)\n"
    "Java HotSpot(TM) Client VM (build 25.401-b10, mixed mode, sharing)\n"
)

posix_only = pytest.mark.skipif(os.name == "nt", reason="uses generated shell scripts")


def write_fake_java(home: Path, stderr_text: str, name: str = "java") -> Path:
    """Create <home>/bin/<name> as a shell script printing stderr_text to stderr."""
    bin_dir = home / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    script = bin_dir / name
    script.write_text(
        "#!/bin/sh\n"
        "cat >&2 <<'JAVA_EOF'\n"
        f"{stderr_text}"
        "JAVA_EOF\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def fake_java():
    """Factory fixture building fake java installations."""
    return write_fake_java


@pytest.fixture(autouse=True)
def clear_current_manifest():
    """Keep the process-wide manifest slot empty between tests."""
    CURRENT_MANIFEST.clear()
    yield
    CURRENT_MANIFEST.clear()
