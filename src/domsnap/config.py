"""domsnap configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from domsnap.models import (
    DEFAULT_INCLUDE_ATTRIBUTES,
    DEFAULT_TIMEOUT,
    DEFAULT_VIEWPORT,
    DEFAULT_VIEWPORT_EXPANSION,
)


class DomSnapConfigError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


@dataclass
class DomSnapConfig:
    """Configuration for snapshotting pages."""

    project_dir: Path = field(default_factory=lambda: Path(".domsnap"))

    # Selector synthesis
    include_dynamic_attributes: bool = True

    # Page walk
    highlight_elements: bool = False
    viewport_expansion: int = DEFAULT_VIEWPORT_EXPANSION
    strict_children: bool = False  # reject child ids emitted after their parent

    # Prompt rendering
    include_attributes: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_ATTRIBUTES))

    # Browser
    viewport: tuple[int, int] = DEFAULT_VIEWPORT
    headless: bool = True
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_file(cls, config_path: Path) -> DomSnapConfig:
        """Load config from a YAML file."""
        if not config_path.exists():
            raise DomSnapConfigError(f"Config file not found: {config_path}")
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise DomSnapConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise DomSnapConfigError(f"Config file must contain a mapping: {config_path}")
        return cls._from_dict(data, config_path.parent)

    @classmethod
    def _from_dict(cls, data: dict[str, Any], project_dir: Path) -> DomSnapConfig:
        """Create config from a dictionary."""
        config = cls()
        config.project_dir = project_dir

        try:
            if "include_dynamic_attributes" in data:
                config.include_dynamic_attributes = bool(data["include_dynamic_attributes"])
            if "highlight_elements" in data:
                config.highlight_elements = bool(data["highlight_elements"])
            if "viewport_expansion" in data:
                config.viewport_expansion = int(data["viewport_expansion"])
            if "strict_children" in data:
                config.strict_children = bool(data["strict_children"])
            if "headless" in data:
                config.headless = bool(data["headless"])
            if "timeout" in data:
                config.timeout = int(data["timeout"])
        except (TypeError, ValueError) as exc:
            raise DomSnapConfigError(f"Invalid config value: {exc}") from exc

        if "include_attributes" in data:
            attrs = data["include_attributes"]
            if not isinstance(attrs, list) or not all(isinstance(a, str) for a in attrs):
                raise DomSnapConfigError("include_attributes must be a list of attribute names")
            config.include_attributes = list(attrs)

        if "viewport" in data:
            vp = data["viewport"]
            if not isinstance(vp, dict):
                raise DomSnapConfigError("viewport must be a mapping with width and height")
            try:
                config.viewport = (int(vp.get("width", DEFAULT_VIEWPORT[0])), int(vp.get("height", DEFAULT_VIEWPORT[1])))
            except (TypeError, ValueError) as exc:
                raise DomSnapConfigError(f"Invalid viewport: {exc}") from exc

        return config
