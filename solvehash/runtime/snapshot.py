"""Input snapshot loading.

A snapshot is a YAML document capturing manifest constraints, overrides,
the package analysis report, require/ignore sets and the analyzer
identity. Loading one yields a ``HashInputs`` bundle ready for
``hash_inputs``. Writing snapshots belongs to whoever produces them.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from solvehash.primitives.constraints import ANY, constraint_from_declaration
from solvehash.primitives.errors import ConstraintError, SnapshotError, ValidationError
from solvehash.primitives.inputs import (
    AnalyzerInfo,
    HashInputs,
    Override,
    Package,
    PackageError,
    PackageOrErr,
    ProjectProperties,
)
from solvehash.runtime.settings import HashSettings

logger = logging.getLogger(__name__)

KNOWN_KEYS = (
    "analyzer",
    "constraints",
    "test_constraints",
    "overrides",
    "packages",
    "required",
    "ignored",
)


class _Collector:
    """Accumulates field errors so one load reports all of them."""

    def __init__(self):
        self.errors: List[ValidationError] = []

    def add(self, field: str, error: str, value: Any) -> None:
        self.errors.append(ValidationError(field=field, error=error, value=value))


def _mapping(data: Mapping, key: str, errors: _Collector) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        errors.add(key, "must be a mapping", value)
        return {}
    return value


def _string_list(value: Any, field: str, errors: _Collector) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        errors.add(field, "must be a list of strings", value)
        return []
    return list(value)


def _properties(
    section: str, decls: Dict[str, Any], errors: _Collector
) -> Dict[str, ProjectProperties]:
    result = {}
    for root, decl in decls.items():
        field = f"{section}.{root}"
        if decl is None:
            decl = {}
        if not isinstance(decl, dict):
            errors.add(field, "must be a mapping", decl)
            continue
        try:
            constraint = constraint_from_declaration(decl, project_root=root)
        except ConstraintError as e:
            errors.add(field, e.message, decl)
            continue
        source = decl.get("source", "")
        if not isinstance(source, str):
            errors.add(f"{field}.source", "must be a string", source)
            continue
        result[root] = ProjectProperties(
            network_name=source,
            constraint=constraint if constraint is not None else ANY,
        )
    return result


def _overrides(decls: Dict[str, Any], errors: _Collector) -> List[Override]:
    result = []
    for root, decl in decls.items():
        field = f"overrides.{root}"
        if decl is None:
            decl = {}
        if not isinstance(decl, dict):
            errors.add(field, "must be a mapping", decl)
            continue
        try:
            constraint = constraint_from_declaration(decl, project_root=root)
        except ConstraintError as e:
            errors.add(field, e.message, decl)
            continue
        source = decl.get("source")
        if source is not None and not isinstance(source, str):
            errors.add(f"{field}.source", "must be a string", source)
            continue
        result.append(
            Override(project_root=root, network_name=source, constraint=constraint)
        )
    return result


def _packages(value: Any, errors: _Collector) -> List[PackageOrErr]:
    if value is None:
        return []
    if not isinstance(value, list):
        errors.add("packages", "must be a list", value)
        return []

    result: List[PackageOrErr] = []
    for i, entry in enumerate(value):
        field = f"packages[{i}]"
        if not isinstance(entry, dict):
            errors.add(field, "must be a mapping", entry)
            continue
        if "error" in entry:
            if not isinstance(entry["error"], str):
                errors.add(f"{field}.error", "must be a string", entry["error"])
                continue
            result.append(PackageError(message=entry["error"]))
            continue

        missing = [k for k in ("name", "import_path") if not isinstance(entry.get(k), str)]
        if missing:
            errors.add(field, f"missing string field(s): {', '.join(missing)}", entry)
            continue
        comment_path = entry.get("comment_path", "")
        if not isinstance(comment_path, str):
            errors.add(f"{field}.comment_path", "must be a string", comment_path)
            continue
        result.append(
            Package(
                name=entry["name"],
                comment_path=comment_path,
                import_path=entry["import_path"],
                imports=_string_list(entry.get("imports"), f"{field}.imports", errors),
                test_imports=_string_list(
                    entry.get("test_imports"), f"{field}.test_imports", errors
                ),
            )
        )
    return result


def _analyzer(
    value: Any, settings: Optional[HashSettings], errors: _Collector
) -> Optional[AnalyzerInfo]:
    if value is None:
        settings = settings or HashSettings()
        return AnalyzerInfo(settings.analyzer_name, settings.analyzer_version)
    if not isinstance(value, dict) or not isinstance(value.get("name"), str):
        errors.add("analyzer", "must be a mapping with a string name", value)
        return None
    version = value.get("version")
    if version is None:
        errors.add("analyzer.version", "is required", value)
        return None
    return AnalyzerInfo(value["name"], str(version))


def inputs_from_dict(
    data: Mapping[str, Any],
    settings: Optional[HashSettings] = None,
    path: Optional[str] = None,
) -> HashInputs:
    """Build a HashInputs bundle from snapshot data.

    Args:
        data: Parsed snapshot mapping.
        settings: Supplies the analyzer identity when the snapshot has none.
        path: Source path, for error messages.

    Returns:
        Normalized input bundle.

    Raises:
        SnapshotError: If any field is malformed. ``errors`` lists them all.
    """
    if not isinstance(data, Mapping):
        raise SnapshotError("Snapshot must be a mapping", path=path)

    errors = _Collector()
    for key in data:
        if key not in KNOWN_KEYS:
            errors.add(str(key), "unknown snapshot key", data[key])

    analyzer = _analyzer(data.get("analyzer"), settings, errors)
    dependencies = _properties("constraints", _mapping(data, "constraints", errors), errors)
    test_dependencies = _properties(
        "test_constraints", _mapping(data, "test_constraints", errors), errors
    )
    overrides = _overrides(_mapping(data, "overrides", errors), errors)
    report = _packages(data.get("packages"), errors)
    required = _string_list(data.get("required"), "required", errors)
    ignored = _string_list(data.get("ignored"), "ignored", errors)

    if errors.errors:
        raise SnapshotError(
            f"Invalid snapshot: {errors.errors[0]}"
            + (f" (+{len(errors.errors) - 1} more)" if len(errors.errors) > 1 else ""),
            path=path,
            errors=errors.errors,
        )

    return HashInputs.from_manifest(
        analyzer=analyzer,
        dependencies=dependencies,
        test_dependencies=test_dependencies,
        overrides=overrides,
        report=report,
        required=required,
        ignored=ignored,
    )


class SnapshotLoader:
    """Loads input snapshots from YAML files.

    Pure I/O with explicit paths only.
    """

    def __init__(self, settings: Optional[HashSettings] = None):
        self.settings = settings

    def load(self, path: Path) -> HashInputs:
        """Load a snapshot file.

        Args:
            path: Path to snapshot YAML.

        Returns:
            Normalized HashInputs bundle.

        Raises:
            FileNotFoundError: If file doesn't exist.
            SnapshotError: If YAML is invalid or fields are malformed.
        """
        path = Path(path)
        content = path.read_text(encoding="utf-8")

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SnapshotError(f"Invalid YAML in snapshot: {e}", path=str(path), cause=e)

        if data is None:
            data = {}

        inputs = inputs_from_dict(data, settings=self.settings, path=str(path))
        logger.info(
            f"Loaded snapshot {path}: {len(inputs.constraints)} constraints, "
            f"{len(inputs.report)} report entries"
        )
        return inputs

    def exists(self, path: Path) -> bool:
        return Path(path).exists()
