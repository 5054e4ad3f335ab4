"""Policy catalog for SSH trust material.

The catalog is a fixed, ordered tuple of declarative rules. A single
generic evaluator applies every rule to an entry; a rule contributes a
warning only when its matcher selects the entry and the kind or mode
check fails.
"""

import os
import re
from dataclasses import dataclass

from sunshine.audit.models import Entry, EntryKind, ExpectedMode, ModeCheck, PolicyWarning
from sunshine.audit.validator import (
    check_exact,
    check_mask,
    format_kind_mismatch,
    format_mode_mismatch,
    permission_bits,
)

SSH_DIR_NAME = ".ssh"

# Basename patterns for key material inside .ssh (matched with fullmatch)
SSH_KEY_PATTERN = re.compile(r"id_.+")
SSH_PUBLIC_KEY_PATTERN = re.compile(r"id_.+\.pub")

ETC_PATHS: frozenset[str] = frozenset({"/etc", "/etc/ssh"})


@dataclass(frozen=True, slots=True)
class Rule:
    """A declarative permission rule.

    Every matcher field that is set must select the entry for the rule
    to apply. Unset fields do not constrain the match.

    Attributes:
        rule_id: Stable identifier reported with warnings.
        description: Short human-readable description.
        expected_mode: Expected permission bits or mask.
        expected_kind: Expected entry kind (None = don't care).
        name: Exact basename.
        pattern: Regular expression the whole basename must match.
        exclude_pattern: Regular expression the basename must not match.
        parent: Required basename of the parent directory.
        paths: Fixed absolute paths.
        applies_to: Only select entries of this kind.
    """

    rule_id: str
    description: str
    expected_mode: ExpectedMode
    expected_kind: EntryKind | None = None
    name: str | None = None
    pattern: re.Pattern[str] | None = None
    exclude_pattern: re.Pattern[str] | None = None
    parent: str | None = None
    paths: frozenset[str] = frozenset()
    applies_to: EntryKind | None = None

    def matches(self, entry: Entry) -> bool:
        """Check whether this rule selects the given entry."""
        if self.applies_to is not None and entry.kind != self.applies_to:
            return False
        if self.paths and entry.path not in self.paths:
            return False
        if self.name is not None and entry.name != self.name:
            return False
        if self.pattern is not None and not self.pattern.fullmatch(entry.name):
            return False
        if self.exclude_pattern is not None and self.exclude_pattern.fullmatch(entry.name):
            return False
        if self.parent is not None:
            parent_name = os.path.basename(os.path.dirname(entry.path))
            if parent_name != self.parent:
                return False
        return True

    def check(self, entry: Entry) -> PolicyWarning | None:
        """Validate a selected entry against this rule.

        A kind mismatch is reported on its own; the mode is only
        compared once the kind is right.

        Args:
            entry: Entry already selected by :meth:`matches`.

        Returns:
            PolicyWarning on mismatch, None if the entry conforms.
        """
        if self.expected_kind is not None and entry.kind != self.expected_kind:
            return PolicyWarning(
                path=entry.path,
                rule_id=self.rule_id,
                expected=self.expected_kind.value,
                observed=entry.mode,
                message=format_kind_mismatch(entry.path, self.expected_kind, entry.kind),
            )

        expected = self.expected_mode
        if expected.check == ModeCheck.MASK:
            ok = check_mask(entry.mode, expected.value)
        else:
            ok = check_exact(entry.mode, expected.value)
        if ok:
            return None

        return PolicyWarning(
            path=entry.path,
            rule_id=self.rule_id,
            expected=str(expected),
            observed=permission_bits(entry.mode),
            message=format_mode_mismatch(entry.path, expected.value, entry.mode),
        )


def build_catalog(home: str) -> tuple[Rule, ...]:
    """Build the fixed rule catalog for a session.

    Args:
        home: Resolved absolute home directory of the current user.

    Returns:
        Ordered, immutable tuple of rules.
    """
    home = os.path.normpath(home)

    return (
        Rule(
            rule_id="etc-ssh",
            description="/etc and /etc/ssh",
            expected_kind=EntryKind.DIRECTORY,
            expected_mode=ExpectedMode(0o755),
            paths=ETC_PATHS,
        ),
        Rule(
            rule_id="ssh-dir",
            description=".ssh directories",
            expected_kind=EntryKind.DIRECTORY,
            expected_mode=ExpectedMode(0o700),
            name=SSH_DIR_NAME,
        ),
        Rule(
            rule_id="ssh-config",
            description=".ssh/config",
            expected_kind=EntryKind.FILE,
            expected_mode=ExpectedMode(0o400),
            name="config",
            parent=SSH_DIR_NAME,
        ),
        Rule(
            rule_id="ssh-private-key",
            description=".ssh/id_* private keys",
            expected_kind=EntryKind.FILE,
            expected_mode=ExpectedMode(0o600),
            pattern=SSH_KEY_PATTERN,
            exclude_pattern=SSH_PUBLIC_KEY_PATTERN,
            parent=SSH_DIR_NAME,
        ),
        Rule(
            rule_id="ssh-public-key",
            description=".ssh/id_*.pub public keys",
            expected_kind=EntryKind.FILE,
            expected_mode=ExpectedMode(0o644),
            pattern=SSH_PUBLIC_KEY_PATTERN,
            parent=SSH_DIR_NAME,
        ),
        Rule(
            rule_id="authorized-keys",
            description="authorized_keys",
            expected_kind=EntryKind.FILE,
            expected_mode=ExpectedMode(0o600),
            name="authorized_keys",
        ),
        Rule(
            rule_id="known-hosts",
            description="known_hosts",
            expected_kind=EntryKind.FILE,
            expected_mode=ExpectedMode(0o644),
            name="known_hosts",
        ),
        Rule(
            rule_id="home-dir",
            description="home directory",
            expected_kind=EntryKind.DIRECTORY,
            expected_mode=ExpectedMode(0o755),
            paths=frozenset({home}),
        ),
        Rule(
            rule_id="dir-owner-access",
            description="directories must be owner readable or searchable",
            expected_mode=ExpectedMode(0o500, ModeCheck.MASK),
            applies_to=EntryKind.DIRECTORY,
        ),
        Rule(
            rule_id="file-owner-access",
            description="files must be owner readable",
            expected_mode=ExpectedMode(0o400, ModeCheck.MASK),
            applies_to=EntryKind.FILE,
        ),
    )


def evaluate(entry: Entry, catalog: tuple[Rule, ...]) -> list[PolicyWarning]:
    """Apply every catalog rule to an entry.

    Args:
        entry: Resolved entry to check.
        catalog: Rules to apply, in order.

    Returns:
        Warnings in catalog order (empty if the entry conforms).
    """
    warnings: list[PolicyWarning] = []
    for rule in catalog:
        if not rule.matches(entry):
            continue
        warning = rule.check(entry)
        if warning is not None:
            warnings.append(warning)
    return warnings
