"""Constraint and version values.

Only the canonical string form of a constraint reaches the fingerprint, so
each value type here is mostly a ``__str__``. The string form is many-to-one:
a branch and a tag with the same name render identically, and so do a
revision and a tag spelled like a hash. A real change between such values
leaves the fingerprint unchanged. That limitation comes from the constraint
model and is kept as-is.

Manifest declarations map onto these types the usual way:
``version`` -> semver range, or a plain tag when it is not semver-like;
``branch`` -> Branch; ``revision`` -> Revision; nothing -> any version.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from solvehash.primitives.errors import ConstraintError

DECLARATION_KEYS = ("version", "branch", "revision")

_SEMVER_TERM = re.compile(
    r"^(?:[~^]|[<>]=?|=|!=)?\s*v?"
    r"(?:\d+|[xX*])(?:\.(?:\d+|[xX*])){0,2}"
    r"(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)
_RANGE_SPLIT = re.compile(r"\s*\|\|\s*|\s*,\s*|\s+-\s+")
_OPERATOR_GAP = re.compile(r"([~^]|[<>]=?|!?=)\s+")


class Constraint:
    """Base for all constraint values.

    Subclasses are frozen dataclasses; ``str()`` is the canonical form.
    """

    kind = "constraint"

    def __str__(self) -> str:  # pragma: no cover - abstract
        raise NotImplementedError


@dataclass(frozen=True)
class AnyConstraint(Constraint):
    """Matches every version."""

    kind = "any"

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class SemverRange(Constraint):
    """A semantic version range such as ``^1.0.0`` or ``>=1.2, <2``."""

    expression: str

    kind = "semver"

    def __post_init__(self):
        object.__setattr__(self, "expression", " ".join(self.expression.split()))

    def __str__(self) -> str:
        return self.expression


@dataclass(frozen=True)
class Branch(Constraint):
    name: str

    kind = "branch"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Tag(Constraint):
    """A plain, non-semver version name."""

    name: str

    kind = "tag"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Revision(Constraint):
    """An immutable revision identifier (commit hash)."""

    rev: str

    kind = "revision"

    def __str__(self) -> str:
        return self.rev


ANY = AnyConstraint()


def is_semver_range(text: str) -> bool:
    """Check whether every term of ``text`` reads as a semver comparison."""
    text = text.strip()
    if not text:
        return False
    if text == "*":
        return True
    for term in _RANGE_SPLIT.split(text):
        term = term.strip()
        if not term:
            return False
        # "a b" inside one term is an implicit AND of comparisons
        term = _OPERATOR_GAP.sub(r"\1", term)
        for part in term.split():
            if not _SEMVER_TERM.match(part):
                return False
    return True


def parse_version(text: str) -> Constraint:
    """Interpret a ``version`` declaration."""
    text = text.strip()
    if text == "*":
        return ANY
    if is_semver_range(text):
        return SemverRange(text)
    return Tag(text)


def constraint_from_declaration(
    declaration: Optional[Mapping[str, Any]],
    project_root: Optional[str] = None,
) -> Optional[Constraint]:
    """Build a constraint from manifest-style keys.

    Args:
        declaration: Mapping that may hold one of ``version``, ``branch``
            or ``revision``.
        project_root: Root being declared, for error messages.

    Returns:
        The constraint, or None if the declaration names none. Callers decide
        whether None means "any version" (manifests) or "not overridden"
        (override directives).

    Raises:
        ConstraintError: More than one key given, or a non-string value.
    """
    if not declaration:
        return None

    present = [key for key in DECLARATION_KEYS if declaration.get(key) is not None]
    if len(present) > 1:
        raise ConstraintError(
            f"Only one of {', '.join(DECLARATION_KEYS)} may be declared "
            f"(got {', '.join(present)})",
            project_root=project_root,
        )
    if not present:
        return None

    key = present[0]
    value = declaration[key]
    if not isinstance(value, str):
        raise ConstraintError(
            f"{key} must be a string (got {type(value).__name__})",
            project_root=project_root,
        )

    if key == "branch":
        return Branch(value)
    if key == "revision":
        return Revision(value)
    return parse_version(value)
