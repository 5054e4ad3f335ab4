"""Exceptions raised while auditing.

Scan faults are local to one root: the walker catches them and turns
them into a single ScanError. HomeDirectoryUnavailableError is global
and aborts the whole session before any root is scanned.
"""

from sunshine.audit.models import FaultKind


class AuditError(Exception):
    """Base exception for audit errors."""


class HomeDirectoryUnavailableError(AuditError):
    """Raised when the current user's home directory cannot be resolved."""


class ScanFaultError(AuditError):
    """Base exception for per-entry traversal faults.

    Attributes:
        path: Path that could not be inspected.
        fault: Fault classification.
    """

    fault: FaultKind

    def __init__(self, path: str, detail: str | None = None) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}" if detail else path)


class EntryNotFoundError(ScanFaultError):
    """Raised when an entry vanished before it could be inspected."""

    fault = FaultKind.NOT_FOUND


class AccessDeniedError(ScanFaultError):
    """Raised when entry metadata or a directory listing is unreadable."""

    fault = FaultKind.ACCESS_DENIED


class SymlinkResolutionError(ScanFaultError):
    """Raised when a symbolic link target cannot be read."""

    fault = FaultKind.SYMLINK_RESOLUTION
