"""solvehash: deterministic fingerprints of dependency-solve inputs.

Compute a fingerprint when a solve finishes and store it in the lock
record. On the next run, rebuild the inputs and compare::

    fp = hash_inputs(inputs)
    if fp.matches(lock.inputs_digest):
        ...  # lock is still valid
"""

from solvehash.primitives import (
    AnalyzerInfo,
    Fingerprint,
    HashInputs,
    Override,
    Package,
    PackageError,
    ProjectConstraint,
    ProjectIdentifier,
    ProjectProperties,
    hash_inputs,
    hash_inputs_as_string,
)

__version__ = "0.1.0"

__all__ = [
    "AnalyzerInfo",
    "Fingerprint",
    "HashInputs",
    "Override",
    "Package",
    "PackageError",
    "ProjectConstraint",
    "ProjectIdentifier",
    "ProjectProperties",
    "hash_inputs",
    "hash_inputs_as_string",
]
