"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture
def ssh_home(tmp_path: Path) -> Path:
    """Home directory with conforming permissions on all SSH material.

    Layout::

        home/                 0755
        home/.ssh/            0700
        home/.ssh/id_rsa      0600
        home/.ssh/id_rsa.pub  0644
        home/.ssh/authorized_keys 0600
        home/.ssh/known_hosts 0644
    """
    home = tmp_path / "home"
    ssh = home / ".ssh"
    ssh.mkdir(parents=True)

    files = {
        "id_rsa": 0o600,
        "id_rsa.pub": 0o644,
        "authorized_keys": 0o600,
        "known_hosts": 0o644,
    }
    for name, mode in files.items():
        path = ssh / name
        path.write_text(f"{name}\n")
        path.chmod(mode)

    ssh.chmod(0o700)
    home.chmod(0o755)
    return home
