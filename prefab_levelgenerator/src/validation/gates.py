"""
Validation gate decorator for pipeline stage validation.

Provides the @validation_gate decorator for wrapping functions with
automatic validation of what they return.
"""

import functools
import logging
from typing import Callable, Optional, Any

from .core import ValidationStage, ValidationResult, ValidationError

logger = logging.getLogger(__name__)


def validation_gate(
    stage: ValidationStage,
    fail_fast: bool = True,
    log_warnings: bool = True,
    tolerance: float = 0.05,
) -> Callable:
    """Decorator to add a validation gate after a pipeline step.

    If validation fails with FAIL severity issues and fail_fast=True,
    raises ValidationError.

    Args:
        stage: CATALOG validates a returned catalog, PLACEMENT a returned level
        fail_fast: If True, raise ValidationError on FAIL issues
        log_warnings: If True, log WARN issues
        tolerance: Overlap tolerance for PLACEMENT validation

    Usage:
        @validation_gate(ValidationStage.PLACEMENT)
        def build_level(...) -> LevelTree:
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            # Import here to avoid circular imports
            from .unified_validator import get_validator

            validator = get_validator()
            result = func(*args, **kwargs)

            validation_result: Optional[ValidationResult] = None
            if stage == ValidationStage.PLACEMENT and hasattr(result, 'connections'):
                validation_result = validator.validate_level(result, tolerance=tolerance)
            elif stage == ValidationStage.CATALOG and hasattr(result, 'templates'):
                validation_result = validator.validate_catalog(result)

            if validation_result:
                if log_warnings:
                    for issue in validation_result.warnings:
                        logger.warning(str(issue))

                if fail_fast and validation_result.failed:
                    logger.error(f"Validation failed at {stage}: {len(validation_result.errors)} errors")
                    raise ValidationError(validation_result)

            return result

        return wrapper
    return decorator
