"""Package manifest (``package.json``) model.

Only the fields the release run relies on are validated. The parsed document
is kept alongside so writing the new version back preserves every other key
in its original order.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from relpkg.core.result import Err, Ok, Result
from relpkg.core.structured import StrDict, as_str_dict, is_str_map, json_type_name
from relpkg.core.validation import ROOT_PATH, FieldIssue, ValidationError
from relpkg.model.semver import SEMVER_MESSAGE, is_semver
from relpkg.platform.files import write_json

__all__ = [
    "PackageManifest",
    "load_manifest",
    "validate_manifest",
    "write_manifest",
]

_MAP_FIELDS = ("scripts", "dependencies", "devDependencies")


def _empty_document() -> StrDict:
    return {}


@dataclass(frozen=True, slots=True)
class PackageManifest:
    name: str
    version: str
    scripts: dict[str, str] | None = None
    dependencies: dict[str, str] | None = None
    dev_dependencies: dict[str, str] | None = None
    document: StrDict = field(default_factory=_empty_document, compare=False, repr=False)

    def with_version(self, version: str) -> PackageManifest:
        """Copy carrying ``version`` both in the field and in the document."""
        document = dict(self.document)
        document["version"] = version
        return PackageManifest(
            name=self.name,
            version=version,
            scripts=self.scripts,
            dependencies=self.dependencies,
            dev_dependencies=self.dev_dependencies,
            document=document,
        )


def validate_manifest(raw: object) -> Result[PackageManifest, ValidationError]:
    """Validate a parsed ``package.json`` document.

    Returns:
        Ok(PackageManifest), or Err(ValidationError) with one issue per
        offending field.
    """
    data = as_str_dict(raw)
    if data is None:
        return Err(
            ValidationError.single(ROOT_PATH, f"Expected object, received {json_type_name(raw)}")
        )

    issues: list[FieldIssue] = []

    name = data.get("name")
    if "name" not in data:
        issues.append(FieldIssue("name", "Required"))
    elif not isinstance(name, str):
        issues.append(FieldIssue("name", f"Expected string, received {json_type_name(name)}"))
    elif not name:
        issues.append(FieldIssue("name", "Package name is required"))

    version = data.get("version")
    if "version" not in data:
        issues.append(FieldIssue("version", "Required"))
    elif not isinstance(version, str):
        issues.append(
            FieldIssue("version", f"Expected string, received {json_type_name(version)}")
        )
    elif not is_semver(version):
        issues.append(FieldIssue("version", SEMVER_MESSAGE))

    maps: dict[str, dict[str, str] | None] = {}
    for key in _MAP_FIELDS:
        value = data.get(key)
        if key not in data:
            maps[key] = None
            continue
        if not is_str_map(value):
            issues.append(FieldIssue(key, _map_problem(value)))
            continue
        maps[key] = dict(value)

    if issues:
        return Err(ValidationError.of(issues))

    assert isinstance(name, str) and isinstance(version, str)
    return Ok(
        PackageManifest(
            name=name,
            version=version,
            scripts=maps["scripts"],
            dependencies=maps["dependencies"],
            dev_dependencies=maps["devDependencies"],
            document=dict(data),
        )
    )


def _map_problem(value: object) -> str:
    data = as_str_dict(value)
    if data is None:
        return f"Expected object, received {json_type_name(value)}"
    bad = sorted(k for k, v in data.items() if not isinstance(v, str))
    return "Expected string values, invalid entries: " + ", ".join(repr(k) for k in bad)


def load_manifest(path: Path) -> Result[PackageManifest, ValidationError]:
    """Read, parse and validate a manifest file.

    I/O and JSON syntax problems are reported as a single ``(root)`` issue.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ValidationError.single(ROOT_PATH, f"{path.name} not found"))
    except OSError as e:
        return Err(ValidationError.single(ROOT_PATH, f"failed to read {path.name}: {e}"))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ValidationError.single(ROOT_PATH, f"invalid JSON in {path.name}: {e}"))

    return validate_manifest(obj)


def write_manifest(path: Path, manifest: PackageManifest) -> Result[None, str]:
    """Persist the full manifest document, pretty printed with a trailing newline."""
    document = dict(manifest.document)
    document.setdefault("name", manifest.name)
    document["version"] = manifest.version
    try:
        write_json(path, document)
    except OSError as e:
        return Err(f"failed to write {path.name}: {e}")
    return Ok(None)
