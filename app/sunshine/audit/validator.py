"""Mode validation predicates and warning formatting.

All comparisons are restricted to the nine permission bits; setuid,
setgid and sticky bits never influence the outcome.
"""

from sunshine.audit.models import EntryKind

PERMISSION_BITS = 0o1000 - 1


def permission_bits(mode: int) -> int:
    """Strip everything but the rwx bits from a mode."""
    return mode & PERMISSION_BITS


def check_exact(observed: int, expected: int) -> bool:
    """Return True if the permission bits equal the expected value."""
    return permission_bits(observed) == permission_bits(expected)


def check_mask(observed: int, mask: int) -> bool:
    """Return True if the permission bits intersect the mask."""
    return permission_bits(observed) & permission_bits(mask) != 0


def format_mode_mismatch(path: str, expected: int, observed: int) -> str:
    """Format a mode warning line.

    Args:
        path: Offending path.
        expected: Expected permission bits (or mask).
        observed: Observed mode.

    Returns:
        ``"<path>: expected chmod 0700, got 0755"``.
    """
    return (
        f"{path}: expected chmod {permission_bits(expected):04o}, "
        f"got {permission_bits(observed):04o}"
    )


def format_kind_mismatch(path: str, expected: EntryKind, observed: EntryKind) -> str:
    """Format a kind warning line, e.g. ``"<path>: expected file, got directory"``."""
    return f"{path}: expected {expected.value}, got {observed.value}"
