"""Canonical ordering of unordered fingerprint inputs.

Every collection that reaches the digest goes through one of these
functions first. Each uses an explicit sort key, so the result never
depends on dict or set iteration order.

Report ordering: successes first, by import path; then errors, by message.
"""

from typing import Iterable, List, Optional, Tuple

from solvehash.primitives.inputs import (
    Override,
    Package,
    PackageError,
    PackageOrErr,
    ProjectConstraint,
)


def constraint_key(pc: ProjectConstraint) -> Tuple[str, str, str]:
    """Sort key for normalized constraints.

    Roots are unique after normalization; the trailing fields only matter
    for malformed input with duplicate roots, where they keep the order total.
    """
    return (pc.ident.project_root, pc.ident.network_name, str(pc.constraint))


def package_or_err_key(entry: PackageOrErr) -> Tuple:
    """Sort key placing successes before errors.

    Import paths are unique within a report, so the fields after
    ``import_path`` are only tie-breakers.
    """
    if isinstance(entry, PackageError):
        return (1, entry.message)
    return (
        0,
        entry.import_path,
        entry.name,
        entry.comment_path,
        entry.imports,
        entry.test_imports,
    )


def _optional_key(value) -> Tuple[int, str]:
    # absent sorts before present
    if value is None:
        return (0, "")
    return (1, str(value))


def override_key(ovr: Override) -> Tuple[str, Tuple[int, str], Tuple[int, str]]:
    """Sort key for override directives: root, then optional fields."""
    return (
        ovr.project_root,
        _optional_key(ovr.network_name),
        _optional_key(ovr.constraint),
    )


def sorted_constraints(
    constraints: Optional[Iterable[ProjectConstraint]],
) -> List[ProjectConstraint]:
    return sorted(constraints or (), key=constraint_key)


def sorted_report(report: Optional[Iterable[PackageOrErr]]) -> List[PackageOrErr]:
    """Order a package-or-error report.

    Package entries keep their import lists untouched; only the entries
    themselves are reordered.
    """
    entries = list(report or ())
    for entry in entries:
        if not isinstance(entry, (Package, PackageError)):
            raise TypeError(
                f"Report entries must be Package or PackageError "
                f"(got {type(entry).__name__})"
            )
    return sorted(entries, key=package_or_err_key)


def sorted_strings(values: Optional[Iterable[str]]) -> List[str]:
    """Sort a require or ignore set. Duplicates collapse."""
    return sorted(set(values or ()))


def sorted_overrides(overrides: Optional[Iterable[Override]]) -> List[Override]:
    return sorted(overrides or (), key=override_key)
