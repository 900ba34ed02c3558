"""Configuration loading for side-effects-lint."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from side_effects_lint.discovery import DEFAULT_EXTENSIONS
from side_effects_lint.rules.side_effects import DEFAULT_SDK_NAMESPACES

CONFIG_FILENAMES = (".side-effects-lint.toml", "side-effects-lint.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("side_effects_lint", "side-effects-lint")

DEFAULT_ROOTS = ("src/utils/", "src/services/", "src/modules/", "utils/", "lib/")
DEFAULT_REPORT = "side-effect-report.txt"
OUTPUT_FORMATS = {"human", "json", "text"}


@dataclass(slots=True)
class RulesConfig:
    """Side-effect rule selection."""

    enable: list[str] | None = None
    disable: list[str] = field(default_factory=list)
    sdk_namespaces: list[str] = field(default_factory=lambda: list(DEFAULT_SDK_NAMESPACES))

    def to_dict(self) -> dict[str, Any]:
        return {
            "enable": list(self.enable) if self.enable is not None else None,
            "disable": list(self.disable),
            "sdk_namespaces": list(self.sdk_namespaces),
        }


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    roots: list[str] = field(default_factory=lambda: list(DEFAULT_ROOTS))
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    format: str = "text"
    report: str | None = DEFAULT_REPORT
    fail_on_findings: bool = False
    rules: RulesConfig = field(default_factory=RulesConfig)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "roots": list(self.roots),
            "extensions": list(self.extensions),
            "include": list(self.include),
            "exclude": list(self.exclude),
            "format": self.format,
            "report": self.report,
            "fail_on_findings": self.fail_on_findings,
            "rules": self.rules.to_dict(),
            "source": self.source,
        }


def load_app_config(repo: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or repository-local files with precedence."""
    repo = repo.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (repo / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = repo / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = repo / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'roots = ["src/utils/", "src/services/", "src/modules/", "utils/", "lib/"]',
            'extensions = [".js", ".ts"]',
            "include = []",
            'exclude = ["**/*.test.ts", "**/*.spec.js"]',
            'format = "text"',
            'report = "side-effect-report.txt"',
            "fail_on_findings = false",
            "",
            "[rules]",
            "enable = [",
            '  "service_init",',
            '  "global_assignment",',
            '  "event_listener",',
            '  "global_define_property",',
            '  "global_mutation",',
            '  "top_level_call",',
            "]",
            "disable = []",
            'sdk_namespaces = ["firebase", "AWS", "Azure", "amplify", "gapi", "Stripe", "Twilio"]',
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")

    roots = _as_str_list(mapping.get("roots"), "roots") if "roots" in mapping else None
    extensions = (
        _as_str_list(mapping.get("extensions"), "extensions") if "extensions" in mapping else None
    )
    if extensions is not None and not extensions:
        raise ValueError("extensions must not be empty")

    raw_report = mapping.get("report", DEFAULT_REPORT)
    report = _as_str(raw_report, "report") or None

    raw_enable = rules_mapping.get("enable")
    enable = _as_str_list(raw_enable, "rules.enable") if raw_enable is not None else None

    namespaces = rules_mapping.get("sdk_namespaces")
    sdk_namespaces = (
        _as_str_list(namespaces, "rules.sdk_namespaces")
        if namespaces is not None
        else list(DEFAULT_SDK_NAMESPACES)
    )
    if not sdk_namespaces:
        raise ValueError("rules.sdk_namespaces must not be empty")

    return AppConfig(
        roots=roots if roots is not None else list(DEFAULT_ROOTS),
        extensions=extensions if extensions is not None else list(DEFAULT_EXTENSIONS),
        include=_as_str_list(mapping.get("include"), "include"),
        exclude=_as_str_list(mapping.get("exclude"), "exclude"),
        format=_as_choice(mapping.get("format", "text"), OUTPUT_FORMATS, "format"),
        report=report,
        fail_on_findings=_as_bool(mapping.get("fail_on_findings", False), "fail_on_findings"),
        rules=RulesConfig(
            enable=enable,
            disable=_as_str_list(rules_mapping.get("disable"), "rules.disable"),
            sdk_namespaces=sdk_namespaces,
        ),
        source=source,
    )


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_bool(raw: Any, field_name: str) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return raw
