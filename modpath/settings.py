"""Settings management for modpath.

Scope-aware YAML settings that feed `ResolverOptions`. Only the `resolver:`
section is read:

```yaml
resolver:
  extra_extensions: [vue, .svelte]
  extra_excluded_extensions: [.d.ts]
  extra_package_fields: [browser]
  extra_builtin_modules: [electron]
  manifest_fallback: escalate   # or strict
  retry_from_parent: true
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml

from .resolution.options import ResolverOptions

logger = logging.getLogger(__name__)

Scope = Literal["local", "project", "global"]

SECTION = "resolver"

# Option keys whose values accumulate across scopes instead of overriding
LIST_KEYS = (
    "extra_extensions",
    "extra_excluded_extensions",
    "extra_package_fields",
    "extra_builtin_modules",
)

# Option keys holding a single value, overridden by more specific scopes
SCALAR_KEYS = ("manifest_fallback", "retry_from_parent")


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths for the standard modpath layout."""
        return cls(
            global_settings=Path.home() / ".modpath" / "settings.yaml",
            project_settings=Path.cwd() / ".modpath" / "settings.yaml",
            local_settings=Path.cwd() / ".modpath" / "settings.local.yaml",
        )


class ResolverSettings:
    """Resolver settings merged across scopes.

    Scope priority (most specific wins for scalars):
    1. local (.modpath/settings.local.yaml) - gitignored, machine-specific
    2. project (.modpath/settings.yaml) - committed, team-shared
    3. global (~/.modpath/settings.yaml) - user defaults

    List options are concatenated in global, project, local order, matching
    how the resolver itself only ever extends its defaults.
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_section(self) -> dict[str, Any]:
        """Load and merge the resolver section from all scopes."""
        result: dict[str, Any] = {}
        for scope in ("global", "project", "local"):
            section = self._read_scope(scope).get(SECTION) or {}
            if not isinstance(section, dict):
                logger.warning(f"Ignoring '{SECTION}' in {self._get_scope_path(scope)}: expected a mapping")
                continue
            result = self._merge(result, section)
        return result

    def to_options(self) -> ResolverOptions:
        """Validate the merged settings into resolver options.

        Raises:
            pydantic.ValidationError: Settings contain invalid values
        """
        return ResolverOptions.model_validate(self.get_merged_section())

    def add_to_list(self, key: str, value: str, scope: Scope = "project") -> None:
        """Append a value to one of the list options at the given scope."""
        if key not in LIST_KEYS:
            raise ValueError(f"'{key}' is not a list option. Choose from: {', '.join(LIST_KEYS)}")

        settings = self._read_scope(scope)
        section = settings.setdefault(SECTION, {})
        values = section.setdefault(key, [])
        if value not in values:
            values.append(value)
            self._write_scope(scope, settings)

    def set_value(self, key: str, value: Any, scope: Scope = "project") -> None:
        """Set a scalar option at the given scope."""
        if key not in SCALAR_KEYS:
            raise ValueError(f"'{key}' is not a scalar option. Choose from: {', '.join(SCALAR_KEYS)}")

        settings = self._read_scope(scope)
        settings.setdefault(SECTION, {})[key] = value
        self._write_scope(scope, settings)

    # ----- Scope utilities -----

    def _get_scope_path(self, scope: Scope) -> Path:
        """Get settings file path for scope."""
        return {
            "local": self.paths.local_settings,
            "project": self.paths.project_settings,
            "global": self.paths.global_settings,
        }[scope]

    def _read_scope(self, scope: Scope) -> dict[str, Any]:
        """Read settings from a specific scope; malformed files are skipped."""
        path = self._get_scope_path(scope)
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return {}
        if not isinstance(content, dict):
            logger.warning(f"Ignoring {path}: expected a mapping at the top level")
            return {}
        return content

    def _write_scope(self, scope: Scope, settings: dict[str, Any]) -> None:
        """Write settings to a specific scope."""
        path = self._get_scope_path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(settings, f, default_flow_style=False)

    def _merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Merge two resolver sections: lists concatenate, scalars override."""
        result = base.copy()
        for key, value in overlay.items():
            if key in LIST_KEYS and isinstance(value, list):
                result[key] = [*result.get(key, []), *value]
            else:
                result[key] = value
        return result


# Convenience function for quick access
def get_settings() -> ResolverSettings:
    """Get a settings instance with default paths."""
    return ResolverSettings()
