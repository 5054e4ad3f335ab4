"""Audit domain models for permission scanning.

This module defines the core data structures produced and consumed
while auditing a filesystem tree: entry kinds, expected modes,
visited entries, and the two kinds of findings (policy warnings and
scan errors).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EntryKind(str, Enum):
    """Kind of filesystem object.

    Attributes:
        FILE: Regular file.
        DIRECTORY: Directory.
        SYMLINK: Symbolic link. The classifier never produces it: links
            are described by their target.
        OTHER: Socket, FIFO, device node and the like.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class ModeCheck(str, Enum):
    """How an observed mode is compared against a rule.

    Attributes:
        EXACT: Permission bits must equal the expected value.
        MASK: Permission bits must share at least one bit with the mask.
    """

    EXACT = "exact"
    MASK = "mask"


class FaultKind(str, Enum):
    """Reason a root's traversal was aborted.

    Attributes:
        NOT_FOUND: Entry vanished between enumeration and inspection.
        ACCESS_DENIED: Entry metadata or directory listing unreadable.
        SYMLINK_RESOLUTION: Symbolic link target could not be read.
    """

    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    SYMLINK_RESOLUTION = "symlink_resolution"


@dataclass(frozen=True, slots=True)
class ExpectedMode:
    """Expected permission bits for a rule.

    Attributes:
        value: Permission bits (exact value or mask).
        check: Comparison strategy.
    """

    value: int
    check: ModeCheck = ModeCheck.EXACT

    def __str__(self) -> str:
        if self.check == ModeCheck.MASK:
            return f"mask {self.value:04o}"
        return f"{self.value:04o}"


@dataclass(frozen=True, slots=True)
class Entry:
    """A single filesystem object visited during traversal.

    When the visited path is a symbolic link, ``path``, ``name``,
    ``kind`` and ``mode`` describe the link target and ``symlink``
    holds the path of the link itself.

    Attributes:
        path: Absolute path (post symlink resolution).
        name: Basename of ``path``.
        kind: Kind of the filesystem object.
        mode: Lowest 9 permission bits.
        symlink: Path of the link this entry was reached through, if any.
    """

    path: str
    name: str
    kind: EntryKind
    mode: int
    symlink: str | None = None

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE


@dataclass(frozen=True, slots=True)
class PolicyWarning:
    """A permission discrepancy found on an entry.

    Attributes:
        path: Path of the offending entry.
        rule_id: Identifier of the rule that fired.
        expected: Rendered expectation (``0700``, ``mask 0500`` or a kind).
        observed: Observed permission bits.
        message: Human-readable warning line.
    """

    path: str
    rule_id: str
    expected: str
    observed: int
    message: str

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "rule_id": self.rule_id,
            "expected": self.expected,
            "observed": f"{self.observed:04o}",
            "message": self.message,
        }


_FAULT_MESSAGES: dict[FaultKind, str] = {
    FaultKind.NOT_FOUND: "not found",
    FaultKind.ACCESS_DENIED: "permission denied",
    FaultKind.SYMLINK_RESOLUTION: "cannot resolve symlink",
}


@dataclass(frozen=True, slots=True)
class ScanError:
    """A traversal fault that ended the scan of one root.

    Attributes:
        path: Path that could not be inspected.
        root: Root whose traversal was aborted.
        fault: Fault classification.
        detail: Optional underlying OS error text.
    """

    path: str
    root: str
    fault: FaultKind
    detail: str | None = None

    @property
    def message(self) -> str:
        """Error line, e.g. ``/home/u/.ssh/id_rsa: not found``."""
        return f"{self.path}: {_FAULT_MESSAGES[self.fault]}"

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "root": self.root,
            "fault": self.fault.value,
            "message": self.message,
            "detail": self.detail,
        }


Finding = PolicyWarning | ScanError


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Merged outcome of scanning one or more roots.

    Attributes:
        warnings: Policy warnings, in per-root traversal order.
        errors: At most one scan error per root.
    """

    warnings: tuple[PolicyWarning, ...] = field(default_factory=tuple)
    errors: tuple[ScanError, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True when neither warnings nor errors were produced."""
        return not self.warnings and not self.errors

    @property
    def warning_lines(self) -> list[str]:
        return [w.message for w in self.warnings]

    @property
    def error_lines(self) -> list[str]:
        return [e.message for e in self.errors]

    @classmethod
    def from_findings(cls, findings: list[Finding]) -> "ScanResult":
        """Split a mixed list of findings into a ScanResult.

        Args:
            findings: Warnings and errors in delivery order.

        Returns:
            ScanResult preserving the relative order of each kind.
        """
        warnings = tuple(f for f in findings if isinstance(f, PolicyWarning))
        errors = tuple(f for f in findings if isinstance(f, ScanError))
        return cls(warnings=warnings, errors=errors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "warnings": [w.to_dict() for w in self.warnings],
            "errors": [e.to_dict() for e in self.errors],
            "summary": {
                "warnings": len(self.warnings),
                "errors": len(self.errors),
                "clean": self.is_clean,
            },
        }
