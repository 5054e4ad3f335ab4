"""Permission audit engine.

This module provides the policy catalog, entry classifier, tree walker
and multi-root scan sessions.
"""

from sunshine.audit.classifier import EntryClassifier
from sunshine.audit.errors import (
    AccessDeniedError,
    AuditError,
    EntryNotFoundError,
    HomeDirectoryUnavailableError,
    ScanFaultError,
    SymlinkResolutionError,
)
from sunshine.audit.models import (
    Entry,
    EntryKind,
    ExpectedMode,
    FaultKind,
    Finding,
    ModeCheck,
    PolicyWarning,
    ScanError,
    ScanResult,
)
from sunshine.audit.policy import Rule, build_catalog, evaluate
from sunshine.audit.session import COMPLETE, ScanSession, resolve_home, scan, start_session
from sunshine.audit.walker import walk

__all__ = [
    "COMPLETE",
    "AccessDeniedError",
    "AuditError",
    "Entry",
    "EntryClassifier",
    "EntryKind",
    "EntryNotFoundError",
    "ExpectedMode",
    "FaultKind",
    "Finding",
    "HomeDirectoryUnavailableError",
    "ModeCheck",
    "PolicyWarning",
    "Rule",
    "ScanError",
    "ScanFaultError",
    "ScanResult",
    "ScanSession",
    "SymlinkResolutionError",
    "build_catalog",
    "evaluate",
    "resolve_home",
    "scan",
    "start_session",
    "walk",
]
