"""Transforms, candidate alignment and the separating axis overlap oracle."""

import math

import numpy as np
import pytest

from level_test_utils import corridor
from prefab_levelgenerator.src.generators.layout import (
    AABB,
    OrientedBox,
    RigidTransform,
    SeparatingAxisOracle,
    rotation_steps,
    yaw_matrix,
)
from prefab_levelgenerator.src.generators.layout.spatial import separation_report
from prefab_levelgenerator.src.generators.layout.transforms import as_tuple, yaw_matrix_degrees
from prefab_levelgenerator.src.generators.placement import build_candidate, build_root
from prefab_levelgenerator.src.generators.rooms import (
    BoundingVolume,
    EntranceFacing,
    EntranceSocket,
    RoomTemplate,
)


def box(center, half=(1.0, 1.0, 1.0), yaw=0.0):
    return OrientedBox(
        center=np.asarray(center, dtype=float),
        axes=yaw_matrix_degrees(yaw),
        half_extents=np.asarray(half, dtype=float),
    )


# -- transforms --

def test_rotation_steps():
    assert rotation_steps(False) == (0,)
    assert rotation_steps(True) == (0, 1, 2, 3)


def test_quarter_turn_is_exact():
    rotated = yaw_matrix(1) @ np.array([1.0, 0.0, 0.0])
    assert as_tuple(rotated) == (0.0, -1.0, 0.0)
    assert np.array_equal(yaw_matrix(4), yaw_matrix(0))
    assert np.array_equal(yaw_matrix(1) @ yaw_matrix(3), np.eye(3))


def test_degrees_match_quarter_turns():
    assert np.array_equal(yaw_matrix_degrees(180), yaw_matrix(2))
    diag = yaw_matrix_degrees(45) @ np.array([1.0, 0.0, 0.0])
    assert diag[0] == pytest.approx(math.sqrt(0.5))
    assert diag[1] == pytest.approx(-math.sqrt(0.5))


def test_rigid_transform_applies_rotation_then_translation():
    transform = RigidTransform(5, (10.0, 0.0, 2.0))
    assert transform.rotation_step == 1
    assert as_tuple(transform.apply((0.0, 1.0, 0.0))) == (11.0, 0.0, 2.0)
    moved = transform.with_position((0.0, 0.0, 0.0))
    assert moved.rotation_step == 1
    assert as_tuple(moved.position) == (0.0, 0.0, 0.0)


def test_facing_rotation_follows_yaw():
    assert EntranceFacing.NORTH.rotated(1) == EntranceFacing.EAST
    assert EntranceFacing.EAST.rotated(1) == EntranceFacing.SOUTH
    assert EntranceFacing.WEST.rotated(3) == EntranceFacing.SOUTH
    assert EntranceFacing.UP.rotated(2) == EntranceFacing.UP
    assert EntranceFacing.SOUTH.opposite() == EntranceFacing.NORTH


# -- candidate builder --

def test_candidate_socket_lands_on_target():
    template = corridor()
    for step in range(4):
        for socket in range(2):
            candidate = build_candidate(template, step, socket, (5.0, -3.0, 1.0))
            assert candidate.entrance_position(socket) == (5.0, -3.0, 1.0)
            assert candidate.rotation_step == step
            assert not candidate.is_committed
            assert candidate.handle is None


def test_candidate_rotation_moves_room_and_facings():
    candidate = build_candidate(corridor(), 1, 0, (1.0, 0.0, 0.0))
    # East socket turns to face south, so the room sits north of the target
    assert candidate.position == (1.0, 1.0, 0.0)
    assert candidate.entrance_facing(0) == EntranceFacing.SOUTH
    assert candidate.entrance_position(1) == (1.0, 2.0, 0.0)


def test_root_sits_at_origin():
    root = build_root(corridor())
    assert root.position == (0.0, 0.0, 0.0)
    assert root.rotation_step == 0
    assert root.entrance_position(0) == (1.0, 0.0, 0.0)


def test_world_box_follows_rotation():
    template = RoomTemplate(
        template_id="Long",
        bounds=BoundingVolume(center=(1.0, 0.0, 0.5), size=(4.0, 2.0, 1.0)),
        entrances=(EntranceSocket("a", (3.0, 0.0, 0.0), EntranceFacing.EAST),),
    )
    candidate = build_candidate(template, 1, 0, (0.0, 0.0, 0.0))
    aabb = candidate.world_box().to_aabb()
    # Rotated a quarter turn, the long axis runs along Y
    assert aabb.max_x - aabb.min_x == pytest.approx(2.0)
    assert aabb.max_y - aabb.min_y == pytest.approx(4.0)
    assert candidate.world_box() is candidate.world_box()


# -- overlap oracle --

def test_touching_boxes_do_not_penetrate():
    oracle = SeparatingAxisOracle()
    assert oracle.penetration(box((0, 0, 0)), box((2, 0, 0))) == 0.0
    assert oracle.penetration(box((0, 0, 0)), box((2, 2, 0))) == 0.0


def test_overlap_depth_is_minimum_axis_overlap():
    oracle = SeparatingAxisOracle()
    assert oracle.penetration(box((0, 0, 0)), box((1.5, 0, 0))) == pytest.approx(0.5)
    assert oracle.penetration(box((0, 0, 0)), box((1.5, 1.9, 0))) == pytest.approx(0.1)
    assert oracle.penetration(box((0, 0, 0)), box((0, 0, 0))) == pytest.approx(2.0)


def test_rotated_box_overlap():
    oracle = SeparatingAxisOracle()
    depth = oracle.penetration(box((0, 0, 0)), box((2.2, 0, 0), yaw=45))
    assert depth == pytest.approx(1.0 + math.sqrt(2.0) - 2.2)


def test_diagonal_gap_found_beyond_broad_phase():
    a = box((0, 0, 0))
    b = box((1.9, 1.9, 0), yaw=45)
    assert a.to_aabb().intersects(b.to_aabb())
    assert SeparatingAxisOracle(use_broad_phase=False).penetration(a, b) == 0.0
    assert SeparatingAxisOracle().penetration(a, b) == 0.0


def test_separation_report():
    depth, volume = separation_report(box((0, 0, 0)), box((1.5, 0, 0)))
    assert depth == pytest.approx(0.5)
    assert volume == pytest.approx(0.5 * 2.0 * 2.0)


def test_aabb_helpers():
    a = AABB(0, 0, 0, 2, 2, 2)
    b = AABB(1, 1, 1, 3, 3, 3)
    c = AABB(2, 0, 0, 4, 2, 2)
    assert a.intersects(b)
    assert not a.intersects(c)
    assert a.intersection_volume(b) == pytest.approx(1.0)
    assert a.intersection_volume(c) == 0.0
    assert a.volume == pytest.approx(8.0)


def test_corners():
    corners = box((1, 1, 1)).corners()
    assert corners.shape == (8, 3)
    assert corners.min(axis=0).tolist() == [0.0, 0.0, 0.0]
    assert corners.max(axis=0).tolist() == [2.0, 2.0, 2.0]
