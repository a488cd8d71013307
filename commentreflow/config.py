"""Workspace configuration support for comment reflow."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .errors import ReflowConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "commentreflow.toml"
DEFAULT_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".c", ".h", ".cc", ".cpp", ".java")


@dataclass(frozen=True)
class ReflowOptions:
    """Resolved options for the reflow engine."""

    # Line settings
    max_width: int = 80

    # Regions that are never reflowed
    fenced_code_opaque: bool = True
    jsdoc_example_opaque: bool = True

    # Fixed-point driver
    max_passes: int = 100

    def __post_init__(self) -> None:
        if isinstance(self.max_width, bool) or not isinstance(self.max_width, int):
            raise ReflowConfigError(
                f"max_width must be an integer, got {self.max_width!r}",
                hint="Set max_width to a positive whole number such as 80",
            )
        if self.max_width < 1:
            raise ReflowConfigError(
                f"max_width must be positive, got {self.max_width}",
                hint="Set max_width to a positive whole number such as 80",
            )
        if isinstance(self.max_passes, bool) or not isinstance(self.max_passes, int) or self.max_passes < 1:
            raise ReflowConfigError(f"max_passes must be a positive integer, got {self.max_passes!r}")
        for name in ("fenced_code_opaque", "jsdoc_example_opaque"):
            if not isinstance(getattr(self, name), bool):
                raise ReflowConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ReflowOptions":
        """Build options from a flat mapping, ignoring unknown keys."""
        known = {option.name for option in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "ReflowOptions":
        values = {option.name: getattr(self, option.name) for option in fields(self)}
        values.update({key: value for key, value in overrides.items() if value is not None})
        return ReflowOptions(**values)


@dataclass
class WorkspaceConfig:
    """Resolved workspace configuration."""

    root: Path
    options: ReflowOptions = field(default_factory=ReflowOptions)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    source: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def matches(self, path: Path) -> bool:
        return path.suffix in self.extensions

    def discover(self, targets: Sequence[str]) -> List[Path]:
        """Expand files and directories into the source files to process."""
        found: List[Path] = []
        for target in targets:
            path = Path(target)
            if not path.is_absolute():
                path = self.root / path
            if path.is_file():
                found.append(path)
            elif path.is_dir():
                found.extend(sorted(p for p in path.rglob("*") if p.is_file() and self.matches(p)))
            else:
                logger.warning("Skipping %s (not a file or directory)", target)
        return found


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _section(data: Dict[str, Any], path: Path) -> Dict[str, Any]:
    if path.name == "pyproject.toml":
        section = data.get("tool", {}).get("commentreflow", {})
    else:
        section = data
    if not isinstance(section, dict):
        raise ReflowConfigError(f"Configuration in {path} must be a table", path=str(path))
    return section


def _parse_extensions(section: Dict[str, Any]) -> List[str]:
    values = section.get("extensions")
    if values is None:
        return list(DEFAULT_EXTENSIONS)
    if isinstance(values, str):
        values = [part.strip() for part in values.split(",") if part.strip()]
    if not isinstance(values, (list, tuple)):
        raise ReflowConfigError("extensions must be a list of file suffixes")
    return [str(value) if str(value).startswith(".") else f".{value}" for value in values]


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    candidate = root / DEFAULT_CONFIG_NAME
    if candidate.exists():
        return candidate
    pyproject = root / "pyproject.toml"
    if pyproject.exists() and "commentreflow" in _read_toml_config(pyproject).get("tool", {}):
        return pyproject
    return None


def load_workspace_config(root: Path, explicit: Optional[Path] = None) -> WorkspaceConfig:
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        if explicit is not None:
            raise ReflowConfigError(
                f"Configuration file {explicit} does not exist",
                path=str(explicit),
            )
        return WorkspaceConfig(root=root)

    try:
        data = _read_toml_config(config_path)
    except tomllib.TOMLDecodeError as exc:
        raise ReflowConfigError(
            f"Invalid TOML in {config_path}: {exc}",
            path=str(config_path),
        ) from exc

    section = _section(data, config_path)
    logger.debug("Loaded reflow configuration from %s", config_path)
    return WorkspaceConfig(
        root=root,
        options=ReflowOptions.from_mapping(section),
        extensions=_parse_extensions(section),
        source=config_path,
        raw=data,
    )


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_EXTENSIONS",
    "ReflowOptions",
    "WorkspaceConfig",
    "locate_config_file",
    "load_workspace_config",
]
