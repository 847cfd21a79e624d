"""
Graph export utilities for level debugging.

Provides export functions to inspect generated levels in:
- DOT format (Graphviz) for visual graph inspection
- JSON format for programmatic analysis and reproducibility tracking

These are one-way debug dumps; there is no loader.
"""

from typing import Any, Dict, Optional
import json


# Color by template category
_CATEGORY_COLORS = {
    'hall': '#87CEEB',   # Sky blue
    'room': '#D3D3D3',   # Light gray
}
_ROOT_COLOR = '#90EE90'  # Light green


def export_level_dot(level) -> str:
    """Export a LevelTree as Graphviz DOT format.

    Args:
        level: Generated LevelTree

    Returns:
        DOT format string; nodes are rooms, edges are entrance connections
    """
    lines = ['digraph Level {']
    lines.append('  rankdir=LR;')
    lines.append('  node [shape=box, style=filled];')
    lines.append('')

    for room in level.rooms:
        x, y, z = room.position
        label_lines = [
            f"{room.template_id}",
            f"id: {room.index}",
            f"pos: ({x:g}, {y:g}, {z:g})",
        ]
        if room.rotation_step:
            label_lines.append(f"rot: {room.rotation_step * 90}")
        label = '\\n'.join(label_lines)

        if room.index == 0:
            color = _ROOT_COLOR
        else:
            color = _CATEGORY_COLORS.get(room.template.category.lower(), '#D3D3D3')

        lines.append(f'  room_{room.index} [label="{label}" fillcolor="{color}"];')

    lines.append('')

    for conn in level.connections:
        lines.append(
            f'  room_{conn.parent.room_index} -> room_{conn.child.room_index} '
            f'[taillabel="e{conn.parent.socket_index}", headlabel="e{conn.child.socket_index}"];'
        )

    lines.append('}')
    return '\n'.join(lines)


def export_level_json(level, seed: Optional[int] = None) -> str:
    """Export a LevelTree as JSON with metadata.

    Args:
        level: Generated LevelTree
        seed: The seed used for generation (defaults to level.seed)

    Returns:
        JSON string with the level and debug statistics
    """
    output: Dict[str, Any] = {
        'metadata': {
            'seed': seed if seed is not None else level.seed,
            'version': '1.0',
            'generator': 'prefab-levelgenerator',
        },
        'statistics': {
            'room_count': len(level.rooms),
            'connection_count': len(level.connections),
            'dead_end_count': len(level.dead_ends),
            'fallback_count': len(level.warnings),
            'template_counts': level.template_counts(),
            'leaf_room_ids': level.leaves(),
        },
        'level': level.to_dict(),
    }
    return json.dumps(output, indent=2)


def derive_branch_seed(global_seed: int, branch_index: int) -> int:
    """Derive a deterministic seed for a sub-run from the global seed."""
    return (global_seed * 31 + branch_index) % (2**31 - 1)
