"""Tests for EntryClassifier path resolution."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from sunshine.audit.classifier import EntryClassifier
from sunshine.audit.errors import (
    AccessDeniedError,
    EntryNotFoundError,
    SymlinkResolutionError,
)
from sunshine.audit.models import EntryKind, FaultKind
from sunshine.audit.policy import build_catalog


@pytest.fixture
def classifier(tmp_path: Path) -> EntryClassifier:
    """Classifier whose home directory is outside every test tree."""
    return EntryClassifier(build_catalog(str(tmp_path / "nobody")))


class TestClassify:
    """Tests for classify on regular objects."""

    def test_regular_file(self, classifier: EntryClassifier, tmp_path: Path) -> None:
        path = tmp_path / "known_hosts"
        path.write_text("")
        path.chmod(0o640)

        entry = classifier.classify(str(path))

        assert entry.path == str(path)
        assert entry.name == "known_hosts"
        assert entry.kind == EntryKind.FILE
        assert entry.mode == 0o640
        assert entry.symlink is None

    def test_directory(self, classifier: EntryClassifier, tmp_path: Path) -> None:
        path = tmp_path / ".ssh"
        path.mkdir()
        path.chmod(0o700)

        entry = classifier.classify(str(path))

        assert entry.kind == EntryKind.DIRECTORY
        assert entry.mode == 0o700

    def test_special_bits_dropped(self, classifier: EntryClassifier, tmp_path: Path) -> None:
        path = tmp_path / "shared"
        path.mkdir()
        path.chmod(0o1777)

        entry = classifier.classify(str(path))

        assert entry.mode == 0o777

    def test_fifo_is_other(self, classifier: EntryClassifier, tmp_path: Path) -> None:
        path = tmp_path / "pipe"
        os.mkfifo(path)

        entry = classifier.classify(str(path))

        assert entry.kind == EntryKind.OTHER

    def test_relative_path_made_absolute(
        self,
        classifier: EntryClassifier,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "file").write_text("")
        monkeypatch.chdir(tmp_path)

        entry = classifier.classify("file")

        assert entry.path == str(tmp_path / "file")

    def test_missing_path_raises_not_found(
        self, classifier: EntryClassifier, tmp_path: Path
    ) -> None:
        missing = tmp_path / "vanished"

        with pytest.raises(EntryNotFoundError) as exc_info:
            classifier.classify(str(missing))

        assert exc_info.value.path == str(missing)
        assert exc_info.value.fault == FaultKind.NOT_FOUND

    def test_stat_permission_error_raises_access_denied(
        self, classifier: EntryClassifier, tmp_path: Path
    ) -> None:
        path = tmp_path / "locked"
        path.write_text("")

        with (
            patch(
                "sunshine.audit.classifier.os.stat",
                side_effect=PermissionError(13, "Permission denied"),
            ),
            pytest.raises(AccessDeniedError) as exc_info,
        ):
            classifier.classify(str(path))

        assert exc_info.value.fault == FaultKind.ACCESS_DENIED
        assert exc_info.value.detail == "Permission denied"


class TestClassifySymlinks:
    """Tests for symbolic link resolution."""

    def test_link_describes_target(self, classifier: EntryClassifier, tmp_path: Path) -> None:
        target = tmp_path / "real_keys"
        target.write_text("")
        target.chmod(0o600)
        link = tmp_path / "authorized_keys"
        link.symlink_to(target)

        entry = classifier.classify(str(link))

        assert entry.path == str(target)
        assert entry.name == "real_keys"
        assert entry.kind == EntryKind.FILE
        assert entry.mode == 0o600
        assert entry.symlink == str(link)

    def test_relative_link_resolved_against_link_dir(
        self, classifier: EntryClassifier, tmp_path: Path
    ) -> None:
        (tmp_path / "data").mkdir()
        target = tmp_path / "data" / "known_hosts"
        target.write_text("")
        (tmp_path / "links").mkdir()
        link = tmp_path / "links" / "hosts"
        link.symlink_to(Path("..") / "data" / "known_hosts")

        entry = classifier.classify(str(link))

        assert entry.path == str(target)

    def test_link_to_directory(self, classifier: EntryClassifier, tmp_path: Path) -> None:
        target = tmp_path / "dotssh"
        target.mkdir()
        target.chmod(0o750)
        link = tmp_path / "ssh-link"
        link.symlink_to(target)

        entry = classifier.classify(str(link))

        assert entry.kind == EntryKind.DIRECTORY
        assert entry.mode == 0o750

    def test_link_chain_reports_final_kind(
        self, classifier: EntryClassifier, tmp_path: Path
    ) -> None:
        """A link to a link is described by the file at the end of the chain."""
        target = tmp_path / "id_rsa"
        target.write_text("")
        target.chmod(0o600)
        inner = tmp_path / "inner"
        inner.symlink_to(target)
        outer = tmp_path / "outer"
        outer.symlink_to(inner)

        entry = classifier.classify(str(outer))

        assert entry.kind == EntryKind.FILE
        assert entry.kind != EntryKind.SYMLINK
        assert entry.mode == 0o600

    def test_dangling_link_raises_not_found(
        self, classifier: EntryClassifier, tmp_path: Path
    ) -> None:
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "nowhere")

        with pytest.raises(EntryNotFoundError) as exc_info:
            classifier.classify(str(link))

        assert exc_info.value.path == str(link)

    def test_unreadable_link_raises_resolution_error(
        self, classifier: EntryClassifier, tmp_path: Path
    ) -> None:
        target = tmp_path / "target"
        target.write_text("")
        link = tmp_path / "link"
        link.symlink_to(target)

        with (
            patch(
                "sunshine.audit.classifier.os.readlink",
                side_effect=OSError(22, "Invalid argument"),
            ),
            pytest.raises(SymlinkResolutionError) as exc_info,
        ):
            classifier.classify(str(link))

        assert exc_info.value.path == str(link)
        assert exc_info.value.fault == FaultKind.SYMLINK_RESOLUTION


class TestInspect:
    """Tests for classify + evaluate in one step."""

    def test_warning_uses_target_mode(self, classifier: EntryClassifier, tmp_path: Path) -> None:
        ssh = tmp_path / ".ssh"
        ssh.mkdir()
        target = ssh / "id_rsa"
        target.write_text("")
        target.chmod(0o644)
        link = tmp_path / "key-link"
        link.symlink_to(target)

        entry, warnings = classifier.inspect(str(link))

        assert entry.symlink == str(link)
        assert [w.message for w in warnings] == [f"{target}: expected chmod 0600, got 0644"]

    def test_conforming_entry_has_no_warnings(
        self, classifier: EntryClassifier, tmp_path: Path
    ) -> None:
        path = tmp_path / "known_hosts"
        path.write_text("")
        path.chmod(0o644)

        _, warnings = classifier.inspect(str(path))

        assert warnings == []
