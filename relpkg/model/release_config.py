"""Release configuration (``.release-package.json``) model.

Each JSON object of the configuration is declared once as a tuple of
``FieldSpec``. The same declarations drive:

- ``apply_defaults``: fills absent keys, never touches explicit values;
- the structural validator, which collects one ``FieldIssue`` per problem;
- ``ReleaseConfig.to_dict`` (serialization back to the JSON shape);
- the JSON Schema exporter in ``relpkg.schema``.

``platforms.npm``, ``platforms.github`` and ``git`` are closed: unknown keys
are errors. The top level, ``platforms``, ``publishConfig`` and ``hooks``
tolerate unknown keys (so ``$schema`` and newer keys keep validating); those
keys are dropped from the validated value.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, cast
from urllib.parse import urlparse

from relpkg.core.result import Err, Ok, Result
from relpkg.core.structured import StrDict, as_str_dict, is_str_list, json_type_name
from relpkg.core.validation import ROOT_PATH, FieldIssue, ValidationError, join_path
from relpkg.model.semver import SEMVER_MESSAGE, is_semver

__all__ = [
    "ACCESS_LEVELS",
    "DEFAULT_REGISTRY",
    "FieldSpec",
    "GIT_FIELDS",
    "GITHUB_FIELDS",
    "HOOK_FIELDS",
    "NPM_FIELDS",
    "PUBLISH_CONFIG_FIELDS",
    "TOP_FIELDS",
    "GitConfig",
    "GithubPlatform",
    "Hooks",
    "NpmPlatform",
    "Platforms",
    "PublishConfig",
    "ReleaseConfig",
    "apply_defaults",
    "create_default_release_config",
    "load_release_config",
    "render_template",
    "validate_release_config",
]

Access = Literal["public", "restricted"]
ACCESS_LEVELS: tuple[Access, ...] = ("public", "restricted")

DEFAULT_REGISTRY = "https://registry.npmjs.org/"
DEFAULT_ASSETS: tuple[str, ...] = ("dist/**", "package.json", "README.md")
VERSION_PLACEHOLDER = "${version}"

FieldKind = Literal["string", "boolean", "access", "url", "semver", "string_list"]


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT = _NoDefault()


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Declaration of one JSON property.

    Attributes:
        key: JSON property name.
        attr: Attribute name on the model dataclass.
        kind: Value type.
        default: Value filled in when the key is absent.
        required: Absence is an error (only meaningful without a default).
        min_message: Message for an empty string, when empty is not allowed.
    """

    key: str
    attr: str
    kind: FieldKind
    default: object = NO_DEFAULT
    required: bool = False
    min_message: str | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


PUBLISH_CONFIG_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("access", "access", "access"),
    FieldSpec("registry", "registry", "url"),
)

NPM_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("publish", "publish", "boolean", default=True),
    FieldSpec("registry", "registry", "url"),
    FieldSpec("access", "access", "access", default="public"),
    FieldSpec("tag", "tag", "string", default="latest"),
)

GITHUB_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("publish", "publish", "boolean", default=True),
    FieldSpec(
        "repository",
        "repository",
        "string",
        required=True,
        min_message="Repository is required (format: owner/repo)",
    ),
    FieldSpec("branch", "branch", "string", default="main"),
    FieldSpec("createRelease", "create_release", "boolean", default=True),
    FieldSpec("releaseName", "release_name", "string", default=f"Release {VERSION_PLACEHOLDER}"),
    FieldSpec("generateNotes", "generate_notes", "boolean", default=True),
    FieldSpec("assets", "assets", "string_list", default=list(DEFAULT_ASSETS)),
    FieldSpec("draft", "draft", "boolean", default=False),
    FieldSpec("prerelease", "prerelease", "boolean", default=False),
)

GIT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        "commitMessage", "commit_message", "string", default=f"chore: release {VERSION_PLACEHOLDER}"
    ),
    FieldSpec("tagPrefix", "tag_prefix", "string", default="v"),
    FieldSpec(
        "requireCleanWorkingDirectory", "require_clean_working_directory", "boolean", default=True
    ),
    FieldSpec("requireUpToDate", "require_up_to_date", "boolean", default=True),
    FieldSpec("push", "push", "boolean", default=True),
    FieldSpec("pushTags", "push_tags", "boolean", default=True),
)

HOOK_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("beforeRelease", "before_release", "string"),
    FieldSpec("afterRelease", "after_release", "string"),
    FieldSpec("beforePublish", "before_publish", "string"),
    FieldSpec("afterPublish", "after_publish", "string"),
)

TOP_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("$schema", "schema", "string"),
    FieldSpec(
        "name", "name", "string", required=True, min_message="Package name is required"
    ),
    FieldSpec("version", "version", "semver"),
)


# -----------------------------------------------------------------------------
# Model
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PublishConfig:
    access: Access | None = None
    registry: str | None = None


@dataclass(frozen=True, slots=True)
class NpmPlatform:
    publish: bool = True
    registry: str | None = None
    access: Access = "public"
    tag: str = "latest"
    publish_config: PublishConfig | None = None

    @property
    def effective_access(self) -> Access:
        if self.publish_config is not None and self.publish_config.access is not None:
            return self.publish_config.access
        return self.access

    @property
    def effective_registry(self) -> str | None:
        if self.publish_config is not None and self.publish_config.registry is not None:
            return self.publish_config.registry
        return self.registry


@dataclass(frozen=True, slots=True)
class GithubPlatform:
    repository: str
    publish: bool = True
    branch: str = "main"
    create_release: bool = True
    release_name: str = f"Release {VERSION_PLACEHOLDER}"
    generate_notes: bool = True
    assets: tuple[str, ...] = DEFAULT_ASSETS
    draft: bool = False
    prerelease: bool = False


@dataclass(frozen=True, slots=True)
class Platforms:
    npm: NpmPlatform | None = None
    github: GithubPlatform | None = None


@dataclass(frozen=True, slots=True)
class GitConfig:
    commit_message: str = f"chore: release {VERSION_PLACEHOLDER}"
    tag_prefix: str = "v"
    require_clean_working_directory: bool = True
    require_up_to_date: bool = True
    push: bool = True
    push_tags: bool = True

    def commit_message_for(self, version: str) -> str:
        return render_template(self.commit_message, version)

    def tag_for(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"


@dataclass(frozen=True, slots=True)
class Hooks:
    """Lifecycle commands. Declared for tooling; the release run never executes them."""

    before_release: str | None = None
    after_release: str | None = None
    before_publish: str | None = None
    after_publish: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    name: str
    version: str | None = None
    schema: str | None = None
    platforms: Platforms | None = None
    git: GitConfig | None = None
    hooks: Hooks | None = None

    @property
    def npm(self) -> NpmPlatform | None:
        return self.platforms.npm if self.platforms is not None else None

    @property
    def github(self) -> GithubPlatform | None:
        return self.platforms.github if self.platforms is not None else None

    @property
    def registry_publish_enabled(self) -> bool:
        """Publishing is on unless ``platforms.npm.publish`` is explicitly false."""
        return self.npm is None or self.npm.publish

    def to_dict(self) -> StrDict:
        """Serialize back to the ``.release-package.json`` shape."""
        out = _dump(self, TOP_FIELDS)
        if self.platforms is not None:
            platforms: StrDict = {}
            if self.platforms.npm is not None:
                npm = _dump(self.platforms.npm, NPM_FIELDS)
                if self.platforms.npm.publish_config is not None:
                    npm["publishConfig"] = _dump(
                        self.platforms.npm.publish_config, PUBLISH_CONFIG_FIELDS
                    )
                platforms["npm"] = npm
            if self.platforms.github is not None:
                platforms["github"] = _dump(self.platforms.github, GITHUB_FIELDS)
            out["platforms"] = platforms
        if self.git is not None:
            out["git"] = _dump(self.git, GIT_FIELDS)
        if self.hooks is not None:
            out["hooks"] = _dump(self.hooks, HOOK_FIELDS)
        return out


def render_template(template: str, version: str) -> str:
    """Substitute ``${version}`` in a configured message template."""
    return template.replace(VERSION_PLACEHOLDER, version)


def _dump(obj: object, fields: tuple[FieldSpec, ...]) -> StrDict:
    out: StrDict = {}
    for spec in fields:
        value = getattr(obj, spec.attr)
        if value is None:
            continue
        out[spec.key] = list(value) if isinstance(value, tuple) else value
    return out


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------


def _fill(data: StrDict, fields: tuple[FieldSpec, ...]) -> None:
    for spec in fields:
        if spec.key not in data and spec.has_default:
            data[spec.key] = copy.deepcopy(spec.default)


def apply_defaults(raw: Mapping[str, object]) -> StrDict:
    """Return a copy of ``raw`` with defaults filled into every present section.

    Only absent keys are filled. Sections that are absent stay absent, and
    sections that are not objects are left for the validator to report.
    """
    data: StrDict = copy.deepcopy(dict(raw))

    platforms = as_str_dict(data.get("platforms"))
    if platforms is not None:
        npm = as_str_dict(platforms.get("npm"))
        if npm is not None:
            _fill(npm, NPM_FIELDS)
        github = as_str_dict(platforms.get("github"))
        if github is not None:
            _fill(github, GITHUB_FIELDS)

    git = as_str_dict(data.get("git"))
    if git is not None:
        _fill(git, GIT_FIELDS)

    return data


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


def _check_value(value: object, spec: FieldSpec) -> str | None:
    match spec.kind:
        case "boolean":
            if not isinstance(value, bool):
                return f"Expected boolean, received {json_type_name(value)}"
        case "string" | "url" | "semver":
            if not isinstance(value, str):
                return f"Expected string, received {json_type_name(value)}"
            if spec.min_message is not None and not value:
                return spec.min_message
            if spec.kind == "url" and not _is_absolute_url(value):
                return "Invalid url"
            if spec.kind == "semver" and not is_semver(value):
                return SEMVER_MESSAGE
        case "access":
            if value not in ACCESS_LEVELS:
                expected = " | ".join(f"'{a}'" for a in ACCESS_LEVELS)
                received = json.dumps(value, default=str)
                return f"Invalid enum value. Expected {expected}, received {received}"
        case "string_list":
            if not isinstance(value, list):
                return f"Expected array, received {json_type_name(value)}"
            if not is_str_list(value):
                return "Expected array of strings"
    return None


def _is_absolute_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)


def _check_object(
    data: StrDict,
    fields: tuple[FieldSpec, ...],
    path: str,
    *,
    closed: bool,
    nested: frozenset[str] = frozenset(),
) -> list[FieldIssue]:
    issues: list[FieldIssue] = []

    if closed:
        known = {spec.key for spec in fields} | nested
        unknown = [key for key in data if key not in known]
        if unknown:
            keys = ", ".join(f"'{key}'" for key in unknown)
            issues.append(FieldIssue(join_path(path), f"Unrecognized key(s) in object: {keys}"))

    for spec in fields:
        field_path = join_path(path, spec.key)
        if spec.key not in data:
            if spec.required:
                issues.append(FieldIssue(field_path, "Required"))
            continue
        problem = _check_value(data[spec.key], spec)
        if problem is not None:
            issues.append(FieldIssue(field_path, problem))

    return issues


def _section(data: StrDict, key: str, path: str, issues: list[FieldIssue]) -> StrDict | None:
    """Return an optional nested object, recording an issue if it has the wrong type."""
    if key not in data:
        return None
    value = data[key]
    section = as_str_dict(value)
    if section is None:
        issues.append(
            FieldIssue(join_path(path, key), f"Expected object, received {json_type_name(value)}")
        )
    return section


def _validate_structure(data: StrDict) -> list[FieldIssue]:
    issues = _check_object(data, TOP_FIELDS, "", closed=False)

    platforms = _section(data, "platforms", "", issues)
    if platforms is not None:
        npm = _section(platforms, "npm", "platforms", issues)
        if npm is not None:
            issues.extend(
                _check_object(
                    npm,
                    NPM_FIELDS,
                    "platforms.npm",
                    closed=True,
                    nested=frozenset({"publishConfig"}),
                )
            )
            publish_config = _section(npm, "publishConfig", "platforms.npm", issues)
            if publish_config is not None:
                issues.extend(
                    _check_object(
                        publish_config,
                        PUBLISH_CONFIG_FIELDS,
                        "platforms.npm.publishConfig",
                        closed=False,
                    )
                )
        github = _section(platforms, "github", "platforms", issues)
        if github is not None:
            issues.extend(_check_object(github, GITHUB_FIELDS, "platforms.github", closed=True))

    git = _section(data, "git", "", issues)
    if git is not None:
        issues.extend(_check_object(git, GIT_FIELDS, "git", closed=True))

    hooks = _section(data, "hooks", "", issues)
    if hooks is not None:
        issues.extend(_check_object(hooks, HOOK_FIELDS, "hooks", closed=False))

    return issues


def _values(data: StrDict, fields: tuple[FieldSpec, ...]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for spec in fields:
        if spec.key not in data:
            continue
        value = data[spec.key]
        out[spec.attr] = tuple(cast(list[str], value)) if spec.kind == "string_list" else value
    return out


def _build(data: StrDict) -> ReleaseConfig:
    """Construct the model from a document that passed validation."""
    platforms: Platforms | None = None
    platforms_data = as_str_dict(data.get("platforms"))
    if platforms_data is not None:
        npm: NpmPlatform | None = None
        npm_data = as_str_dict(platforms_data.get("npm"))
        if npm_data is not None:
            publish_config_data = as_str_dict(npm_data.get("publishConfig"))
            publish_config = (
                PublishConfig(**_values(publish_config_data, PUBLISH_CONFIG_FIELDS))
                if publish_config_data is not None
                else None
            )
            npm = NpmPlatform(**_values(npm_data, NPM_FIELDS), publish_config=publish_config)
        github_data = as_str_dict(platforms_data.get("github"))
        github = (
            GithubPlatform(**_values(github_data, GITHUB_FIELDS))
            if github_data is not None
            else None
        )
        platforms = Platforms(npm=npm, github=github)

    git_data = as_str_dict(data.get("git"))
    hooks_data = as_str_dict(data.get("hooks"))

    return ReleaseConfig(
        **_values(data, TOP_FIELDS),
        platforms=platforms,
        git=GitConfig(**_values(git_data, GIT_FIELDS)) if git_data is not None else None,
        hooks=Hooks(**_values(hooks_data, HOOK_FIELDS)) if hooks_data is not None else None,
    )


def validate_release_config(raw: object) -> Result[ReleaseConfig, ValidationError]:
    """Validate a parsed ``.release-package.json`` document.

    Defaults are applied first (absent keys only), then the structure is
    checked. An existing ``ReleaseConfig`` is accepted and re-validated
    through its dict form.

    Returns:
        Ok(ReleaseConfig), or Err(ValidationError) listing every offending
        field.
    """
    if isinstance(raw, ReleaseConfig):
        raw = raw.to_dict()

    data = as_str_dict(raw)
    if data is None:
        return Err(
            ValidationError.single(ROOT_PATH, f"Expected object, received {json_type_name(raw)}")
        )

    filled = apply_defaults(data)
    issues = _validate_structure(filled)
    if issues:
        return Err(ValidationError.of(issues))
    return Ok(_build(filled))


def create_default_release_config(name: str) -> ReleaseConfig:
    """Fully populated configuration used to scaffold a new ``.release-package.json``."""
    return ReleaseConfig(
        name=name,
        platforms=Platforms(
            npm=NpmPlatform(
                publish=True,
                registry=DEFAULT_REGISTRY,
                access="public",
                tag="latest",
                publish_config=PublishConfig(access="public"),
            ),
            github=GithubPlatform(repository="owner/repo"),
        ),
        git=GitConfig(),
    )


def load_release_config(path: Path) -> Result[ReleaseConfig | None, ValidationError]:
    """Read and validate the configuration file.

    Returns:
        Ok(None) if the file does not exist, Ok(ReleaseConfig) if it is
        valid, Err(ValidationError) otherwise.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Ok(None)
    except OSError as e:
        return Err(ValidationError.single(ROOT_PATH, f"failed to read {path.name}: {e}"))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ValidationError.single(ROOT_PATH, f"invalid JSON in {path.name}: {e}"))

    return validate_release_config(obj)
