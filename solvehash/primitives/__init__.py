"""solvehash primitives: pure, stateless fingerprinting units."""

from solvehash.primitives.constraints import (
    ANY,
    AnyConstraint,
    Branch,
    Constraint,
    Revision,
    SemverRange,
    Tag,
    constraint_from_declaration,
    parse_version,
)
from solvehash.primitives.digest import (
    HashWriter,
    InputWriter,
    TextWriter,
    hash_inputs,
    hash_inputs_as_string,
    write_inputs,
)
from solvehash.primitives.errors import (
    ConfigurationError,
    ConstraintError,
    FingerprintError,
    SnapshotError,
    SolveHashError,
    ValidationError,
)
from solvehash.primitives.fingerprint import DIGEST_SIZE, Fingerprint
from solvehash.primitives.inputs import (
    AnalyzerInfo,
    HashInputs,
    Override,
    Package,
    PackageError,
    PackageOrErr,
    ProjectConstraint,
    ProjectIdentifier,
    ProjectProperties,
)
from solvehash.primitives.normalize import merge, normalize, override_all

__all__ = [
    # Errors
    "ValidationError",
    "SolveHashError",
    "ConstraintError",
    "SnapshotError",
    "ConfigurationError",
    "FingerprintError",
    # Constraints
    "Constraint",
    "AnyConstraint",
    "ANY",
    "SemverRange",
    "Branch",
    "Tag",
    "Revision",
    "constraint_from_declaration",
    "parse_version",
    # Inputs
    "ProjectIdentifier",
    "ProjectProperties",
    "ProjectConstraint",
    "Override",
    "Package",
    "PackageError",
    "PackageOrErr",
    "AnalyzerInfo",
    "HashInputs",
    # Normalization
    "merge",
    "override_all",
    "normalize",
    # Digest
    "InputWriter",
    "HashWriter",
    "TextWriter",
    "write_inputs",
    "hash_inputs",
    "hash_inputs_as_string",
    # Fingerprint
    "DIGEST_SIZE",
    "Fingerprint",
]
