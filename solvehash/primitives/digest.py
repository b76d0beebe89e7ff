"""Solve input hashing.

Serializes a ``HashInputs`` bundle in one fixed field order and feeds it
to SHA-256 as it goes:

1. constraints: project root, network name, constraint string
2. report: error message, or package name, comment path, import path,
   imports, test imports (import lists in source order)
3. required import paths
4. ignored import paths
5. overrides: project root, network name if set, constraint if set
6. analyzer name and version

Every string is UTF-8 (surrogates passed through) followed by FIELD_END.
Every collection entry starts with a tag naming its section, so an empty
collection writes nothing at all. Import lists inside a package end with
LIST_END, and optional override fields carry a presence tag. All framing
bytes are in 0xF6-0xFF, which UTF-8 never produces, so distinct inputs
cannot concatenate to the same stream ("ab" + "c" vs "a" + "bc",
require {x} vs ignore {x}).
"""

import hashlib
import logging
from typing import List, Optional

from solvehash.primitives.fingerprint import Fingerprint
from solvehash.primitives.inputs import HashInputs, PackageError
from solvehash.primitives.ordering import (
    sorted_constraints,
    sorted_overrides,
    sorted_report,
    sorted_strings,
)

logger = logging.getLogger(__name__)

FIELD_END = b"\xff"
LIST_END = b"\xfe"
PACKAGE_TAG = b"\xfd"
ERROR_TAG = b"\xfc"
NETWORK_NAME_TAG = b"\xfb"
CONSTRAINT_TAG = b"\xfa"
REQUIRED_TAG = b"\xf9"
IGNORED_TAG = b"\xf8"
PROJECT_TAG = b"\xf7"
OVERRIDE_TAG = b"\xf6"


class InputWriter:
    """Sink for the serialized input stream.

    ``write_inputs`` drives a writer; subclasses decide what to do with
    each field.
    """

    def section(self, label: str) -> None:
        """Called before each section. Sections have no bytes of their own."""

    def field(self, label: str, value: str) -> None:
        raise NotImplementedError

    def tag(self, label: str, marker: bytes) -> None:
        raise NotImplementedError

    def end(self, label: str) -> None:
        raise NotImplementedError

    def entry_done(self) -> None:
        """Called after each report entry. Tagged entries need no closing bytes."""


class HashWriter(InputWriter):
    """Feeds the stream into an incremental SHA-256."""

    def __init__(self):
        self._hash = hashlib.sha256()

    def field(self, label: str, value: str) -> None:
        self._hash.update(value.encode("utf-8", "surrogatepass"))
        self._hash.update(FIELD_END)

    def tag(self, label: str, marker: bytes) -> None:
        self._hash.update(marker)

    def end(self, label: str) -> None:
        self._hash.update(LIST_END)

    def fingerprint(self) -> Fingerprint:
        return Fingerprint(self._hash.digest())


class TextWriter(InputWriter):
    """Renders the stream as labelled lines for debugging cache misses."""

    def __init__(self):
        self.lines: List[str] = []
        self._depth = 0

    def _emit(self, text: str) -> None:
        self.lines.append("  " * self._depth + text)

    def section(self, label: str) -> None:
        self._emit(f"# {label}")

    def field(self, label: str, value: str) -> None:
        self._emit(f"{label}: {value}")

    def tag(self, label: str, marker: bytes) -> None:
        # entry tags are implied by the field labels
        if label in ("package", "error"):
            self._emit(f"[{label}]")
            self._depth += 1

    def end(self, label: str) -> None:
        self._emit(f"-- end {label}")

    def entry_done(self) -> None:
        self._depth = max(self._depth - 1, 0)

    def render(self) -> str:
        return "\n".join(self.lines) + "\n"


def write_inputs(inputs: HashInputs, writer: InputWriter) -> None:
    """Serialize ``inputs`` into ``writer`` in canonical order."""
    writer.section("constraints")
    constraints = sorted_constraints(inputs.constraints)
    for pc in constraints:
        writer.tag("project", PROJECT_TAG)
        writer.field("project", pc.ident.project_root)
        writer.field("network_name", pc.ident.network_name)
        writer.field("constraint", str(pc.constraint))

    writer.section("report")
    report = sorted_report(inputs.report)
    for entry in report:
        if isinstance(entry, PackageError):
            writer.tag("error", ERROR_TAG)
            writer.field("message", entry.message)
        else:
            writer.tag("package", PACKAGE_TAG)
            writer.field("name", entry.name)
            writer.field("comment_path", entry.comment_path)
            writer.field("import_path", entry.import_path)
            for imp in entry.imports:
                writer.field("import", imp)
            writer.end("imports")
            for imp in entry.test_imports:
                writer.field("test_import", imp)
            writer.end("test_imports")
        writer.entry_done()

    writer.section("required")
    required = sorted_strings(inputs.required)
    for path in required:
        writer.tag("required", REQUIRED_TAG)
        writer.field("required", path)

    writer.section("ignored")
    ignored = sorted_strings(inputs.ignored)
    for path in ignored:
        writer.tag("ignored", IGNORED_TAG)
        writer.field("ignored", path)

    writer.section("overrides")
    overrides = sorted_overrides(inputs.overrides)
    for ovr in overrides:
        writer.tag("override", OVERRIDE_TAG)
        writer.field("override", ovr.project_root)
        if ovr.network_name is not None:
            writer.tag("network_name", NETWORK_NAME_TAG)
            writer.field("network_name", ovr.network_name)
        if ovr.constraint is not None:
            writer.tag("constraint", CONSTRAINT_TAG)
            writer.field("constraint", str(ovr.constraint))

    writer.section("analyzer")
    writer.field("analyzer", inputs.analyzer.name)
    writer.field("analyzer_version", inputs.analyzer.version_string)

    logger.debug(
        f"Serialized solve inputs: {len(constraints)} constraints, "
        f"{len(report)} report entries, {len(required)} required, "
        f"{len(ignored)} ignored, {len(overrides)} overrides"
    )


def hash_inputs(inputs: HashInputs, writer: Optional[HashWriter] = None) -> Fingerprint:
    """Compute the fingerprint of a solve input bundle.

    Args:
        inputs: The bundle to fingerprint.
        writer: Optional HashWriter to reuse (mainly for tests).

    Returns:
        32-byte SHA-256 Fingerprint.
    """
    writer = writer or HashWriter()
    write_inputs(inputs, writer)
    return writer.fingerprint()


def hash_inputs_as_string(inputs: HashInputs) -> str:
    """Render the exact field sequence ``hash_inputs`` hashes, one per line."""
    writer = TextWriter()
    write_inputs(inputs, writer)
    return writer.render()
