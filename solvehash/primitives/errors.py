"""Error types for solvehash.

Fingerprinting itself never raises: empty collections and package errors
are valid inputs. These errors belong to the layers around it:
- Snapshot loading: invalid YAML, bad structure, bad constraint declarations
- Settings: invalid configuration values
- Fingerprint parsing: malformed stored digests
"""

from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass
class ValidationError:
    """Validation error with field, error message, and value.

    Attributes:
        field: Dotted path of the field that failed validation.
        error: Description of the validation error.
        value: The value that failed validation.
    """

    field: str
    error: str
    value: Any

    def __str__(self) -> str:
        return f"ValidationError: {self.field} - {self.error} (got {self.value!r})"


class SolveHashError(Exception):
    """Base exception for solvehash failures.

    Attributes:
        message: Error description.
        cause: Optional underlying exception being wrapped.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        """Initialize SolveHashError.

        Args:
            message: Description of the error.
            cause: Optional exception that triggered this error.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConstraintError(SolveHashError):
    """A constraint declaration could not be interpreted.

    Attributes:
        message: Description of the error.
        project_root: Optional root whose declaration was rejected.
    """

    def __init__(self, message: str, project_root: Optional[str] = None):
        super().__init__(message)
        self.project_root = project_root


class SnapshotError(SolveHashError):
    """Snapshot I/O or format error.

    Raised for invalid YAML, a non-mapping document, or fields of the
    wrong shape.

    Attributes:
        message: Description of the error.
        path: Optional path to the problematic snapshot.
        errors: Field-level validation errors, if any were collected.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        errors: Optional[List[ValidationError]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.path = path
        self.errors = list(errors or [])


class ConfigurationError(SolveHashError):
    """Configuration error (invalid value, unreadable config file).

    Attributes:
        message: Description of the error.
        field: Optional field name that failed.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class FingerprintError(SolveHashError):
    """A stored fingerprint is malformed (bad hex, wrong length, wrong type)."""
