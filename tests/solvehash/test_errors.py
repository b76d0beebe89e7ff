"""Tests for solvehash error types."""

from solvehash.primitives.errors import (
    ConfigurationError,
    ConstraintError,
    FingerprintError,
    SnapshotError,
    SolveHashError,
    ValidationError,
)


class TestValidationError:
    """ValidationError(field, error, value) dataclass."""

    def test_create_validation_error(self):
        err = ValidationError(field="packages[0]", error="must be a mapping", value=3)
        assert err.field == "packages[0]"
        assert err.value == 3

    def test_validation_error_str(self):
        err = ValidationError(field="required", error="must be a list of strings", value="x")
        assert "required" in str(err)
        assert "must be a list of strings" in str(err)


class TestSolveHashError:
    """Base exception."""

    def test_message_and_cause(self):
        cause = ValueError("bad")
        err = SolveHashError("failed", cause=cause)
        assert err.message == "failed"
        assert err.cause is cause
        assert "failed" in str(err)


class TestSubclasses:
    """Every error derives from SolveHashError."""

    def test_hierarchy(self):
        for cls in (ConstraintError, SnapshotError, ConfigurationError, FingerprintError):
            assert issubclass(cls, SolveHashError)

    def test_constraint_error_root(self):
        err = ConstraintError("two keys", project_root="github.com/x/y")
        assert err.project_root == "github.com/x/y"

    def test_snapshot_error_fields(self):
        field_err = ValidationError("ignored", "must be a list of strings", 5)
        err = SnapshotError("bad snapshot", path="/tmp/s.yaml", errors=[field_err])
        assert err.path == "/tmp/s.yaml"
        assert err.errors == [field_err]

    def test_snapshot_error_defaults(self):
        err = SnapshotError("bad snapshot")
        assert err.path is None
        assert err.errors == []

    def test_configuration_error_field(self):
        err = ConfigurationError("bad level", field="log_level")
        assert err.field == "log_level"
