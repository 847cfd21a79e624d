"""
Unified validator orchestrator.

Central class that coordinates catalog and level checks. Provides the main
validation API for the pipeline and the command line tool.
"""

import logging
from typing import List, Optional

from .core import ValidationResult, ValidationStage, Severity
from .checks.catalog_checks import validate_catalog_templates
from .checks.level_checks import (
    check_room_overlaps,
    check_connections,
    check_visits,
    report_fallbacks,
)

logger = logging.getLogger(__name__)

# Results kept per validator; older entries are dropped first
MAX_HISTORY = 100


class UnifiedValidator:
    """Central orchestrator for all validation checks.

    Coordinates validation at each stage:
    - CATALOG: When a template catalog is loaded
    - PLACEMENT: After a level has been generated

    Attributes:
        strict_mode: If True, treat WARN as FAIL
        enabled: If False, skip all validation
        max_history: Number of recent results kept by get_history()
    """

    def __init__(self, strict_mode: bool = False, enabled: bool = True,
                 max_history: int = MAX_HISTORY):
        self.strict_mode = strict_mode
        self.enabled = enabled
        self.max_history = max_history
        self._validation_history: List[ValidationResult] = []

    def validate_catalog(self, catalog) -> ValidationResult:
        """Validate every template in a catalog.

        Stage: CATALOG

        Checks:
        - CAT-001: Degenerate bounds
        - CAT-002: Template without entrances
        - CAT-003: Socket outside its bounds
        """
        if not self.enabled:
            return ValidationResult(stage=ValidationStage.CATALOG)

        result = validate_catalog_templates(catalog)
        result.stage = ValidationStage.CATALOG

        self._apply_strict_mode(result)
        self._record_result(result)
        return result

    def validate_level(
        self,
        level,
        tolerance: float = 0.05,
        oracle=None,
        check_overlaps: bool = True,
        check_alignment: bool = True,
    ) -> ValidationResult:
        """Validate a generated level.

        Stage: PLACEMENT

        Checks:
        - LVL-001: Room overlap beyond tolerance
        - LVL-002 / LVL-003: Connection alignment and facing
        - LVL-004: Duplicate entrance visits
        - LVL-005: Repeat window fallbacks (info)

        Args:
            level: LevelTree to validate
            tolerance: Overlap tolerance the level was generated with
            oracle: Overlap oracle (default: separating axis test)
            check_overlaps: Whether to run the O(n^2) pairwise overlap check
            check_alignment: Whether to validate connections
        """
        if not self.enabled:
            return ValidationResult(stage=ValidationStage.PLACEMENT)

        result = ValidationResult(stage=ValidationStage.PLACEMENT)

        if check_overlaps:
            result.merge(check_room_overlaps(level, tolerance=tolerance, oracle=oracle))
        if check_alignment:
            result.merge(check_connections(level))
        result.merge(check_visits(level))
        result.merge(report_fallbacks(level))

        self._apply_strict_mode(result)
        self._record_result(result)
        return result

    def get_history(self) -> List[ValidationResult]:
        return self._validation_history.copy()

    def clear_history(self) -> None:
        self._validation_history.clear()

    def _apply_strict_mode(self, result: ValidationResult) -> None:
        """Apply strict mode to a result (promote WARN to FAIL)."""
        if self.strict_mode:
            for issue in result.issues:
                if issue.severity == Severity.WARN:
                    issue.severity = Severity.FAIL

    def _record_result(self, result: ValidationResult) -> None:
        self._validation_history.append(result)
        overflow = len(self._validation_history) - self.max_history
        if overflow > 0:
            del self._validation_history[:overflow]


# =============================================================================
# SINGLETON ACCESSOR
# =============================================================================

_default_validator: Optional[UnifiedValidator] = None


def get_validator(
    strict_mode: bool = None,
    enabled: bool = None
) -> UnifiedValidator:
    """Get the default validator instance.

    Creates a singleton instance on first call. Subsequent calls
    return the same instance unless reset_validator() is called.
    """
    global _default_validator

    if _default_validator is None:
        _default_validator = UnifiedValidator(
            strict_mode=strict_mode or False,
            enabled=enabled if enabled is not None else True,
        )
    else:
        if strict_mode is not None:
            _default_validator.strict_mode = strict_mode
        if enabled is not None:
            _default_validator.enabled = enabled

    return _default_validator


def reset_validator() -> None:
    """Reset the default validator instance."""
    global _default_validator
    _default_validator = None
