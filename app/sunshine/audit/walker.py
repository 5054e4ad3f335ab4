"""Single-root tree walker.

Visits every object under a root in pre-order (parents before
children, siblings sorted by name) and forwards the warnings the
classifier produces. The first fault ends the walk of that root and
is reported as one ScanError.
"""

import logging
import os
from collections.abc import Iterator

from sunshine.audit.classifier import EntryClassifier
from sunshine.audit.errors import AccessDeniedError, EntryNotFoundError, ScanFaultError
from sunshine.audit.models import Finding, ScanError

logger = logging.getLogger(__name__)


def _list_children(path: str) -> list[str]:
    """List a directory's children as sorted absolute paths.

    Raises:
        EntryNotFoundError: If the directory vanished.
        AccessDeniedError: If the directory cannot be listed.
    """
    try:
        names = os.listdir(path)
    except FileNotFoundError as e:
        raise EntryNotFoundError(path, e.strerror) from e
    except OSError as e:
        raise AccessDeniedError(path, e.strerror) from e
    return [os.path.join(path, name) for name in sorted(names)]


def walk(root: str, classifier: EntryClassifier) -> Iterator[Finding]:
    """Walk one root and yield its findings.

    Directories reached through a symbolic link are evaluated once as
    the link target but never descended into.

    Args:
        root: Path to start from.
        classifier: Classifier shared by the session.

    Yields:
        PolicyWarning instances in traversal order, followed by at most
        one ScanError if the walk was aborted.
    """
    root = os.path.abspath(root)
    stack = [root]

    try:
        while stack:
            path = stack.pop()
            entry, warnings = classifier.inspect(path)
            yield from warnings

            if entry.is_dir and entry.symlink is None:
                # Reverse so the smallest name is popped first
                stack.extend(reversed(_list_children(path)))
    except ScanFaultError as e:
        logger.info("Aborting scan of %s: %s", root, e)
        yield ScanError(path=e.path, root=root, fault=e.fault, detail=e.detail)
