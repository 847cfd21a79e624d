"""
Generation settings and their JSON persistence.

Settings files hold a flat JSON object whose keys match the
GenerationSettings fields; unknown keys are ignored with a warning.
"""

from __future__ import annotations
import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    pass


GRAPH_DUMP_FORMATS = ("none", "dot", "json")

BOOL_FIELDS = ("rotate_rooms", "random_root", "validate", "fail_on_invalid",
               "strict_validation", "verbose")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class GenerationSettings:
    # Placement
    depth: int = 4
    rotate_rooms: bool = True
    max_repeat: int = 0
    overlap_tolerance: float = 0.05
    root_template: Optional[str] = None  # None = first catalog entry
    random_root: bool = False

    # Seeding for reproducible generation
    seed: Optional[int] = None  # None = random seed, otherwise deterministic

    # Input / output
    catalog_path: Optional[str] = None  # None = built-in templates
    output_dir: Optional[str] = None
    level_name: str = "generated_level"
    graph_dump_format: str = "none"  # "none", "dot" or "json"

    # Validation
    validate: bool = True
    fail_on_invalid: bool = True
    strict_validation: bool = False

    # Misc
    verbose: bool = False

    def validate_values(self) -> None:
        """Check value types and ranges.

        Raises:
            PipelineError: On the first invalid value
        """
        for name in ("depth", "max_repeat"):
            value = getattr(self, name)
            if not _is_int(value) or value < 0:
                raise PipelineError(f"{name} must be a non-negative integer, got {value!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise PipelineError(f"seed must be an integer or null, got {self.seed!r}")
        if not _is_number(self.overlap_tolerance) or self.overlap_tolerance < 0:
            raise PipelineError(f"overlap_tolerance must be a number >= 0, got {self.overlap_tolerance!r}")
        for name in BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise PipelineError(f"{name} must be true or false, got {value!r}")
        for name in ("root_template", "catalog_path", "output_dir"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise PipelineError(f"{name} must be a string or null, got {value!r}")
        if not isinstance(self.level_name, str) or not self.level_name:
            raise PipelineError(f"level_name must be a non-empty string, got {self.level_name!r}")
        if self.graph_dump_format not in GRAPH_DUMP_FORMATS:
            raise PipelineError(
                f"graph_dump_format must be one of {GRAPH_DUMP_FORMATS}, got {self.graph_dump_format!r}"
            )
        if self.graph_dump_format != "none" and not self.output_dir:
            raise PipelineError("graph_dump_format requires output_dir")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def settings_from_dict(data: Dict[str, Any]) -> GenerationSettings:
    """Create GenerationSettings from a dictionary, ignoring unknown keys."""
    known = {f.name for f in fields(GenerationSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning(f"Ignoring unknown setting(s): {', '.join(unknown)}")
    settings = GenerationSettings(**{k: v for k, v in data.items() if k in known})
    settings.validate_values()
    return settings


def load_settings(file_path: Union[str, Path]) -> GenerationSettings:
    """
    Load settings from a JSON file.

    Raises:
        PipelineError: If the file is missing, not JSON, or holds invalid values
    """
    path = Path(file_path)
    if not path.exists():
        raise PipelineError(f"Settings file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise PipelineError(f"Settings file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PipelineError(f"Settings file {path} must hold a JSON object")
    return settings_from_dict(data)


def save_settings(settings: GenerationSettings, file_path: Union[str, Path]) -> Path:
    """Save settings to a JSON file, creating parent directories."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
    return path
