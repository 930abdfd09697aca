"""Configuration for the graph engine and its widget."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from forcegraph.errors import InvalidConfigError

logger = logging.getLogger(__name__)


class GraphConfig(BaseModel):
    """Appearance, physics and interaction settings for one graph."""

    model_config = ConfigDict(extra="forbid")

    # Appearance
    node_color: str = "#808080"
    hover_color: str = "#ba0f0f"
    edge_color: str = "#555555"
    text_color: str = "#808080"
    background: str = "#191919"
    font: str = "Segoe UI"
    font_size: int = Field(10, gt=0)
    min_label_scale: float = Field(0.7, ge=0.0)
    dim_unrelated: bool = True
    cursor_dot: bool = False

    # View
    persist_zoom: bool = False
    min_scale: float = Field(0.1, gt=0.0)
    max_scale: float = Field(20.0, gt=0.0)

    # Canvas the layout is centred in
    width: float = Field(800.0, gt=0.0)
    height: float = Field(600.0, gt=0.0)

    # Physics
    center_force: float = Field(0.52, ge=0.0)
    repel_force: float = Field(10.0, ge=0.0)
    link_force: float = Field(1.0, ge=0.0)
    link_distance: float = Field(150.0, gt=0.0)
    damping: float = Field(0.01, ge=0.0, lt=1.0)
    repulsion_cap: float = Field(25.0, gt=0.0)

    # Node sizes
    default_size: float = Field(10.0, gt=0.0)
    min_auto_size: float = Field(6.0, gt=0.0)
    max_auto_size: float = Field(30.0, gt=0.0)
    auto_size: Optional[Callable[[int], float]] = None

    # Warm start
    warm_start_frames: int = Field(15, ge=0)
    warm_start_passes: int = Field(30, ge=1)

    seed: Optional[int] = None

    @model_validator(mode="after")
    def _validate_ranges(self) -> "GraphConfig":
        if self.min_scale >= self.max_scale:
            msg = f"min_scale ({self.min_scale}) must be below max_scale ({self.max_scale})"
            raise ValueError(msg)
        for name in ("min_scale", "max_scale"):
            steps = getattr(self, name) * 10
            if abs(steps - round(steps)) > 1e-6:
                raise ValueError(f"{name} ({getattr(self, name)}) must be a multiple of 0.1")
        if self.min_auto_size > self.max_auto_size:
            msg = (
                f"min_auto_size ({self.min_auto_size}) cannot exceed "
                f"max_auto_size ({self.max_auto_size})"
            )
            raise ValueError(msg)
        return self

    @property
    def center(self):
        return self.width / 2, self.height / 2


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            content = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Failed to read configuration %s: %s", path, exc)
        raise InvalidConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    if not isinstance(content, dict):
        raise InvalidConfigError(f"Configuration file {path} must contain a mapping")
    return content


def load_config(path: Optional[Path] = None, **overrides: Any) -> GraphConfig:
    """Build a validated configuration.

    Args:
        path: Optional YAML file whose top-level keys are ``GraphConfig`` fields.
        **overrides: Field values applied on top of the file.

    Returns:
        GraphConfig: The validated configuration.

    Raises:
        InvalidConfigError: If the file is unreadable or a value is out of range.
    """
    raw: Dict[str, Any] = {}
    if path is not None:
        raw.update(_read_yaml(Path(path)))
    raw.update(overrides)
    try:
        return GraphConfig(**raw)
    except ValidationError as exc:
        logger.error("Invalid graph configuration: %s", exc)
        raise InvalidConfigError(f"Invalid graph configuration: {exc}") from exc
