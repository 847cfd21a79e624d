"""
Level generation pipeline module.

Provides seeded level generation with validation and debug graph export.
"""

from .settings import (
    GenerationSettings,
    PipelineError,
    load_settings,
    save_settings,
    settings_from_dict,
)

from .generation_pipeline import (
    GenerationPipeline,
    PipelineResult,
    PipelineStage,
)

__all__ = [
    # Settings
    'GenerationSettings',
    'PipelineError',
    'load_settings',
    'save_settings',
    'settings_from_dict',
    # Pipeline core
    'GenerationPipeline',
    'PipelineResult',
    'PipelineStage',
]
