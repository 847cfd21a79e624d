"""
Generation pipeline for prefab levels.

Orchestrates catalog loading, seeded placement, validation and optional
debug graph dumps. The output is an in-memory LevelTree handed to whatever
renders or plays it; nothing here persists the level for reloading.
"""

import logging
import random
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from prefab_levelgenerator.src.generators.errors import LevelGenerationError
from prefab_levelgenerator.src.generators.layout.level_tree import LevelTree
from prefab_levelgenerator.src.generators.layout.spatial import OverlapOracle
from prefab_levelgenerator.src.generators.placement import (
    InstanceFactory,
    LevelGenerator,
    TrackingInstanceFactory,
)
from prefab_levelgenerator.src.generators.rooms import (
    RoomTemplateCatalog,
    builtin_catalog,
    load_catalog_from_path,
)
from prefab_levelgenerator.src.validation import (
    UnifiedValidator,
    ValidationError,
    ValidationResult,
    ValidationStage,
    validation_gate,
)
from .debug.graph_export import derive_branch_seed, export_level_dot, export_level_json
from .settings import GenerationSettings, PipelineError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PipelineStage(Enum):
    INITIALIZE = "initialize"
    LOAD_CATALOG = "load_catalog"
    GENERATE_LEVEL = "generate_level"
    VALIDATE = "validate"
    WRITE_DEBUG = "write_debug"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------

@dataclass
class PipelineResult:
    success: bool
    level: Optional[LevelTree] = None
    seed: Optional[int] = None
    validation: Optional[ValidationResult] = None
    output_files: List[str] = field(default_factory=list)
    stages_completed: List[PipelineStage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_time(self) -> float:
        return self.metrics.get("total_time", 0.0)

    @property
    def room_count(self) -> int:
        return len(self.level) if self.level is not None else 0

    def add_error(self, error: str, stage: Optional[PipelineStage] = None):
        if stage:
            error = f"[{stage.value}] {error}"
        self.errors.append(error)

    def add_warning(self, warning: str, stage: Optional[PipelineStage] = None):
        if stage:
            warning = f"[{stage.value}] {warning}"
        self.warnings.append(warning)


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

@validation_gate(ValidationStage.CATALOG)
def _load_catalog(catalog_path: Optional[str]) -> RoomTemplateCatalog:
    if catalog_path:
        return load_catalog_from_path(catalog_path)
    return builtin_catalog()


class GenerationPipeline:
    """Generates one level (or a seeded batch) from GenerationSettings."""

    def __init__(
        self,
        settings: Optional[GenerationSettings] = None,
        overlap_oracle: Optional[OverlapOracle] = None,
        instance_factory: Optional[InstanceFactory] = None,
    ):
        self.settings = settings or GenerationSettings()
        self.settings.validate_values()
        self.overlap_oracle = overlap_oracle
        self.instance_factory = instance_factory
        self.current_stage = PipelineStage.INITIALIZE
        self.stage_callback: Optional[Callable[[PipelineStage, str], None]] = None

    # -- helpers --

    def set_stage_callback(self, callback: Callable[[PipelineStage, str], None]):
        self.stage_callback = callback

    def _enter_stage(self, stage: PipelineStage, message: str):
        self.current_stage = stage
        logger.debug(f"[{stage.value}] {message}")
        if self.stage_callback:
            self.stage_callback(stage, message)

    def _resolve_seed(self) -> int:
        if self.settings.seed is not None:
            return self.settings.seed
        return random.randint(0, 2**31 - 1)

    # -- stages --

    def run(self, catalog: Optional[RoomTemplateCatalog] = None,
            seed: Optional[int] = None) -> PipelineResult:
        """Run the pipeline once.

        Args:
            catalog: Catalog to use instead of settings.catalog_path / built-ins
            seed: Seed override (default: settings.seed, else a fresh random seed)

        Returns:
            PipelineResult; ``success`` is False when generation or validation failed
        """
        start = time.time()
        seed = seed if seed is not None else self._resolve_seed()
        result = PipelineResult(success=False, seed=seed)
        self._enter_stage(PipelineStage.INITIALIZE, f"seed={seed}")
        result.stages_completed.append(PipelineStage.INITIALIZE)

        try:
            self._enter_stage(PipelineStage.LOAD_CATALOG, self.settings.catalog_path or "built-in templates")
            if catalog is None:
                catalog = _load_catalog(self.settings.catalog_path)
            result.stages_completed.append(PipelineStage.LOAD_CATALOG)

            self._enter_stage(PipelineStage.GENERATE_LEVEL, f"depth={self.settings.depth}")
            level, factory = self._generate(catalog, seed)
            result.level = level
            for fallback in level.warnings:
                result.add_warning(fallback.message, PipelineStage.GENERATE_LEVEL)
            result.stages_completed.append(PipelineStage.GENERATE_LEVEL)

            if self.settings.validate:
                self._enter_stage(PipelineStage.VALIDATE, f"{len(level)} room(s)")
                result.validation = self._validate(level)
                for issue in result.validation.warnings:
                    result.add_warning(str(issue), PipelineStage.VALIDATE)
                result.stages_completed.append(PipelineStage.VALIDATE)

            if self.settings.graph_dump_format != "none":
                self._enter_stage(PipelineStage.WRITE_DEBUG, self.settings.graph_dump_format)
                result.output_files.append(str(self._write_debug(level, seed)))
                result.stages_completed.append(PipelineStage.WRITE_DEBUG)

            result.metrics.update(self._metrics(level, factory))
            result.success = True
            self._enter_stage(PipelineStage.COMPLETE, f"{len(level)} room(s)")
            result.stages_completed.append(PipelineStage.COMPLETE)

        except ValidationError as e:
            logger.error(f"Validation failed at {self.current_stage.value}")
            result.validation = e.result
            result.add_error(e.result.report(), self.current_stage)
        except (LevelGenerationError, PipelineError) as e:
            logger.error(f"Pipeline failed at {self.current_stage.value}: {e}")
            result.level = None
            result.add_error(str(e), self.current_stage)

        result.metrics["total_time"] = time.time() - start
        return result

    def run_many(self, count: int, catalog: Optional[RoomTemplateCatalog] = None,
                 base_seed: Optional[int] = None) -> List[PipelineResult]:
        """Run ``count`` times with seeds derived from one base seed."""
        base_seed = base_seed if base_seed is not None else self._resolve_seed()
        if catalog is None:
            catalog = _load_catalog(self.settings.catalog_path)
        return [self.run(catalog, seed=derive_branch_seed(base_seed, i)) for i in range(count)]

    def _generate(self, catalog: RoomTemplateCatalog, seed: int):
        factory = self.instance_factory or TrackingInstanceFactory()
        generator = LevelGenerator(
            catalog,
            overlap_oracle=self.overlap_oracle,
            instance_factory=factory,
            overlap_tolerance=self.settings.overlap_tolerance,
        )
        level = generator.generate(
            self.settings.depth,
            rotate_enabled=self.settings.rotate_rooms,
            max_repeat=self.settings.max_repeat,
            rng=random.Random(seed),
            root_template_id=self.settings.root_template,
            random_root=self.settings.random_root,
        )
        level.seed = seed
        return level, factory

    def _validate(self, level: LevelTree) -> ValidationResult:
        validator = UnifiedValidator(strict_mode=self.settings.strict_validation)
        validation = validator.validate_level(
            level,
            tolerance=self.settings.overlap_tolerance,
            oracle=self.overlap_oracle,
        )
        if validation.failed and self.settings.fail_on_invalid:
            raise ValidationError(validation)
        return validation

    def _write_debug(self, level: LevelTree, seed: int) -> Path:
        out_dir = Path(self.settings.output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        fmt = self.settings.graph_dump_format
        path = out_dir / f"{self.settings.level_name}.{fmt}"
        content = export_level_dot(level) if fmt == "dot" else export_level_json(level, seed)
        path.write_text(content, encoding='utf-8')
        logger.info(f"Wrote level graph to {path}")
        return path

    @staticmethod
    def _metrics(level: LevelTree, factory) -> Dict[str, Any]:
        metrics = {
            "room_count": len(level),
            "connection_count": len(level.connections),
            "dead_ends": len(level.dead_ends),
            "fallbacks": len(level.warnings),
            "candidates_built": level.metadata.get("candidates_built", 0),
            "candidates_rejected": level.metadata.get("candidates_rejected", 0),
            "candidates_discarded": level.metadata.get("candidates_discarded", 0),
        }
        if isinstance(factory, TrackingInstanceFactory):
            metrics["handles_created"] = factory.created
            metrics["handles_released"] = factory.released
            metrics["handles_live"] = factory.live_count
        return metrics
