"""Input model for solve fingerprints.

Every value here is transient: it is rebuilt on each invocation from the
manifest, the override table, the package analysis report and the analyzer
metadata. Only the fingerprint computed from a ``HashInputs`` bundle
outlives the call.
"""

from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from solvehash.primitives.constraints import ANY, Constraint


@dataclass(frozen=True)
class ProjectIdentifier:
    """Identity of a dependency.

    Attributes:
        project_root: Root import path of the project.
        network_name: Alternate location to fetch it from ("" = default).
    """

    project_root: str
    network_name: str = ""


@dataclass(frozen=True)
class ProjectProperties:
    """What a manifest declares for one project root."""

    network_name: str = ""
    constraint: Constraint = ANY


@dataclass(frozen=True)
class ProjectConstraint:
    """Final constraint for one dependency, after overrides."""

    ident: ProjectIdentifier
    constraint: Constraint

    @property
    def project_root(self) -> str:
        return self.ident.project_root


@dataclass(frozen=True)
class Override:
    """Override directive for one project root.

    ``None`` means the field is not overridden, which is different from
    overriding it with an empty location or an any-version constraint.
    """

    project_root: str
    network_name: Optional[str] = None
    constraint: Optional[Constraint] = None


@dataclass(frozen=True)
class Package:
    """Result of analyzing one import path.

    ``imports`` and ``test_imports`` keep source order.
    """

    name: str
    comment_path: str
    import_path: str
    imports: Tuple[str, ...] = ()
    test_imports: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "imports", tuple(self.imports))
        object.__setattr__(self, "test_imports", tuple(self.test_imports))


@dataclass(frozen=True)
class PackageError:
    """Analysis failure for one import path."""

    message: str

    def __str__(self) -> str:
        return self.message


PackageOrErr = Union[Package, PackageError]


@dataclass(frozen=True)
class AnalyzerInfo:
    """Name and version of the tool that produced the package report."""

    name: str
    version: Any

    @property
    def version_string(self) -> str:
        return str(self.version)


ConstraintsInput = Union[Mapping[str, ProjectConstraint], Iterable[ProjectConstraint], None]
ReportInput = Union[Mapping[str, PackageOrErr], Iterable[PackageOrErr], None]
OverridesInput = Union[Mapping[str, Override], Iterable[Override], None]


def _values(collection) -> Tuple:
    if collection is None:
        return ()
    if isinstance(collection, Mapping):
        return tuple(collection.values())
    return tuple(collection)


def _keys(collection) -> Tuple:
    # require/ignore sets arrive as sets, lists, or path -> flag mappings
    if collection is None:
        return ()
    return tuple(collection)


@dataclass(frozen=True)
class HashInputs:
    """Everything that influences a solve.

    Entity collections may be given as mappings (their values are used),
    as any iterable, or as None. Require and ignore sets may also be
    mappings keyed by import path; their keys are used. All are frozen
    into tuples on construction so the bundle cannot change underneath a
    fingerprint computation.

    Attributes:
        constraints: Normalized constraints, one per project root.
        report: Package-or-error entries, one per analyzed import path.
        required: Import paths the root manifest requires.
        ignored: Import paths the root manifest ignores.
        overrides: Override directives.
        analyzer: Tool that produced the report.
    """

    analyzer: AnalyzerInfo
    constraints: Tuple[ProjectConstraint, ...] = ()
    report: Tuple[PackageOrErr, ...] = ()
    required: Tuple[str, ...] = ()
    ignored: Tuple[str, ...] = ()
    overrides: Tuple[Override, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "constraints", _values(self.constraints))
        object.__setattr__(self, "report", _values(self.report))
        object.__setattr__(self, "required", _keys(self.required))
        object.__setattr__(self, "ignored", _keys(self.ignored))
        object.__setattr__(self, "overrides", _values(self.overrides))

    @classmethod
    def from_manifest(
        cls,
        analyzer: AnalyzerInfo,
        dependencies: Optional[Mapping[str, ProjectProperties]] = None,
        test_dependencies: Optional[Mapping[str, ProjectProperties]] = None,
        overrides: OverridesInput = None,
        report: ReportInput = None,
        required: Optional[Iterable[str]] = None,
        ignored: Optional[Iterable[str]] = None,
    ) -> "HashInputs":
        """Build a bundle from raw manifest constraints.

        Primary and test dependencies are merged and overrides applied
        before hashing, so a manifest constraint that an override replaces
        does not affect the fingerprint. The overrides themselves are
        hashed too.
        """
        from solvehash.primitives.normalize import normalize

        override_list = _values(overrides)
        constraints: Dict[str, ProjectConstraint] = normalize(
            dependencies, test_dependencies, override_list
        )
        return cls(
            analyzer=analyzer,
            constraints=constraints,
            report=report,
            required=required,
            ignored=ignored,
            overrides=override_list,
        )
