"""Constraint normalization: manifest merge plus overrides."""

from typing import Dict, Iterable, Mapping, Optional

from solvehash.primitives.constraints import ANY
from solvehash.primitives.inputs import (
    Override,
    ProjectConstraint,
    ProjectIdentifier,
    ProjectProperties,
)
from solvehash.primitives.ordering import sorted_overrides


def merge(
    primary: Optional[Mapping[str, ProjectProperties]],
    *others: Optional[Mapping[str, ProjectProperties]],
) -> Dict[str, ProjectProperties]:
    """Merge constraint maps. Earlier maps win on conflicting roots."""
    merged: Dict[str, ProjectProperties] = dict(primary or {})
    for other in others:
        for root, props in (other or {}).items():
            merged.setdefault(root, props)
    return merged


def apply_override(
    root: str, props: Optional[ProjectProperties], ovr: Optional[Override]
) -> ProjectConstraint:
    """Apply one override to one root's declared properties.

    A non-empty override location replaces the declared one; a present
    override constraint replaces the declared constraint.
    """
    props = props or ProjectProperties()
    network_name = props.network_name
    constraint = props.constraint if props.constraint is not None else ANY

    if ovr is not None:
        if ovr.network_name:
            network_name = ovr.network_name
        if ovr.constraint is not None:
            constraint = ovr.constraint

    return ProjectConstraint(
        ident=ProjectIdentifier(project_root=root, network_name=network_name),
        constraint=constraint,
    )


def override_all(
    constraints: Optional[Mapping[str, ProjectProperties]],
    overrides: Optional[Iterable[Override]],
) -> Dict[str, ProjectConstraint]:
    """Apply overrides to every declared root.

    Overrides naming roots the manifest does not declare add those roots.
    When several overrides share a root, later ones in canonical override
    order win.
    """
    by_root: Dict[str, Override] = {}
    for ovr in sorted_overrides(overrides):
        previous = by_root.get(ovr.project_root)
        if previous is not None:
            ovr = Override(
                project_root=ovr.project_root,
                network_name=ovr.network_name or previous.network_name,
                constraint=(
                    ovr.constraint if ovr.constraint is not None else previous.constraint
                ),
            )
        by_root[ovr.project_root] = ovr

    declared = dict(constraints or {})
    roots = set(declared) | set(by_root)
    return {
        root: apply_override(root, declared.get(root), by_root.get(root))
        for root in roots
    }


def normalize(
    dependencies: Optional[Mapping[str, ProjectProperties]],
    test_dependencies: Optional[Mapping[str, ProjectProperties]] = None,
    overrides: Optional[Iterable[Override]] = None,
) -> Dict[str, ProjectConstraint]:
    """Merge primary and test constraints, then apply overrides."""
    return override_all(merge(dependencies, test_dependencies), overrides)
