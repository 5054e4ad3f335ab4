"""Entry classifier.

Resolves a filesystem path to an Entry and applies the policy catalog
to it. Symbolic links are resolved once: the entry describes the link
target, and the target is never walked.
"""

import logging
import os
import stat

from sunshine.audit.errors import (
    AccessDeniedError,
    EntryNotFoundError,
    SymlinkResolutionError,
)
from sunshine.audit.models import Entry, EntryKind, PolicyWarning
from sunshine.audit.policy import Rule, evaluate
from sunshine.audit.validator import permission_bits

logger = logging.getLogger(__name__)


def _kind_of(mode: int) -> EntryKind:
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


def _stat(path: str, *, follow_symlinks: bool) -> os.stat_result:
    """Stat a path, translating OS errors into scan faults."""
    try:
        return os.stat(path, follow_symlinks=follow_symlinks)
    except FileNotFoundError as e:
        raise EntryNotFoundError(path, e.strerror) from e
    except OSError as e:
        raise AccessDeniedError(path, e.strerror) from e


class EntryClassifier:
    """Classifies filesystem paths against a policy catalog.

    The classifier holds no mutable state, so one instance can be
    shared by every root task of a session.

    Args:
        catalog: Rules to apply to every classified entry.
    """

    def __init__(self, catalog: tuple[Rule, ...]) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> tuple[Rule, ...]:
        return self._catalog

    def classify(self, path: str) -> Entry:
        """Resolve a path to an Entry.

        Args:
            path: Path enumerated by the walker.

        Returns:
            Entry describing the object (or the link target for symlinks).

        Raises:
            EntryNotFoundError: If the path or a link target vanished.
            AccessDeniedError: If metadata cannot be read.
            SymlinkResolutionError: If a link cannot be read.
        """
        logger.debug("scanning: %s", path)
        path = os.path.abspath(path)
        st = _stat(path, follow_symlinks=False)

        if not stat.S_ISLNK(st.st_mode):
            return Entry(
                path=path,
                name=os.path.basename(path),
                kind=_kind_of(st.st_mode),
                mode=permission_bits(st.st_mode),
            )

        try:
            target = os.readlink(path)
        except OSError as e:
            raise SymlinkResolutionError(path, e.strerror) from e

        target = os.path.normpath(os.path.join(os.path.dirname(path), target))
        try:
            target_st = os.stat(target)
        except FileNotFoundError as e:
            # Dangling link: the object the link names does not exist
            raise EntryNotFoundError(path, e.strerror) from e
        except OSError as e:
            raise SymlinkResolutionError(path, e.strerror) from e

        logger.debug("resolved symlink %s -> %s", path, target)
        return Entry(
            path=target,
            name=os.path.basename(target),
            kind=_kind_of(target_st.st_mode),
            mode=permission_bits(target_st.st_mode),
            symlink=path,
        )

    def evaluate(self, entry: Entry) -> list[PolicyWarning]:
        """Apply the catalog to an already classified entry."""
        return evaluate(entry, self._catalog)

    def inspect(self, path: str) -> tuple[Entry, list[PolicyWarning]]:
        """Classify a path and evaluate it in one step.

        Args:
            path: Path to inspect.

        Returns:
            Tuple of (entry, warnings).
        """
        entry = self.classify(path)
        return entry, self.evaluate(entry)
