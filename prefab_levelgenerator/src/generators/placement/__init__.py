"""
Placement engine: recursive prefab room placement.
"""

from .candidate_builder import build_candidate, build_root
from .lifecycle import CandidatePool, InstanceFactory, TrackingInstanceFactory
from .placement_engine import (
    LevelGenerator,
    generate,
    DEFAULT_OVERLAP_TOLERANCE,
)

__all__ = [
    'build_candidate',
    'build_root',
    'CandidatePool',
    'InstanceFactory',
    'TrackingInstanceFactory',
    'LevelGenerator',
    'generate',
    'DEFAULT_OVERLAP_TOLERANCE',
]
