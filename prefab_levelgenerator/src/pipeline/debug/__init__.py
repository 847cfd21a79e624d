"""Debug utilities for the generation pipeline."""

from .graph_export import export_level_dot, export_level_json, derive_branch_seed

__all__ = ['export_level_dot', 'export_level_json', 'derive_branch_seed']
