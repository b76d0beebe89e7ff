"""Shared fixtures for solvehash tests."""

import pytest

from solvehash.primitives.constraints import Branch, SemverRange
from solvehash.primitives.inputs import (
    AnalyzerInfo,
    HashInputs,
    Override,
    Package,
    PackageError,
    ProjectConstraint,
    ProjectIdentifier,
)


@pytest.fixture
def analyzer():
    return AnalyzerInfo("importer", "v1")


@pytest.fixture
def full_inputs(analyzer):
    """A bundle with every collection populated."""
    return HashInputs(
        analyzer=analyzer,
        constraints=[
            ProjectConstraint(
                ProjectIdentifier("github.com/x/y", ""), SemverRange("^1.0.0")
            ),
            ProjectConstraint(
                ProjectIdentifier("github.com/a/b", "git.example.com/a/b"),
                Branch("master"),
            ),
        ],
        report=[
            Package(
                name="app",
                comment_path="",
                import_path="example.com/app",
                imports=["github.com/x/y", "github.com/a/b"],
                test_imports=["github.com/stretchr/testify/assert"],
            ),
            Package(
                name="util",
                comment_path="example.com/app/util",
                import_path="example.com/app/util",
                imports=["strings"],
            ),
            PackageError("cannot find package \"example.com/app/gone\""),
        ],
        required=["github.com/golang/lint/golint", "github.com/x/y/cmd"],
        ignored=["example.com/app/internal/fixtures"],
        overrides=[
            Override("github.com/a/b", network_name="git.example.com/a/b"),
            Override("github.com/c/d", constraint=SemverRange(">=2.0.0")),
        ],
    )
