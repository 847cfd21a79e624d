import json
import random

import pytest

from level_test_utils import corridor
from prefab_levelgenerator.src.generators.errors import GenerationFailedError
from prefab_levelgenerator.src.generators.layout import EntranceRef, LevelTree, RepeatFallback
from prefab_levelgenerator.src.generators.layout.spatial import SeparatingAxisOracle
from prefab_levelgenerator.src.generators.placement import (
    CandidatePool,
    LevelGenerator,
    TrackingInstanceFactory,
    build_candidate,
    build_root,
)


def _chain():
    """Root corridor with one corridor attached to its east entrance."""
    level = LevelTree()
    root = build_root(corridor())
    level.commit(root)
    child = build_candidate(corridor(), 0, 1, root.entrance_world(0))
    level.commit(child)
    level.mark_visited(EntranceRef(0, 0))
    level.connect(EntranceRef(0, 0), EntranceRef(1, 1))
    return level


def test_commit_assigns_arena_indices():
    level = _chain()
    assert [room.index for room in level.rooms] == [0, 1]
    assert level.root is level.rooms[0]
    assert level.room(1).position == (2.0, 0.0, 0.0)
    assert level.room(1).is_committed


def test_tree_queries():
    level = _chain()
    assert level.children_of(0) == [1]
    assert level.parent_of(1) == 0
    assert level.parent_of(0) is None
    assert level.branch_path(1) == [0, 1]
    assert level.branch_template_ids(1) == ["Corridor", "Corridor"]
    assert level.leaves() == [1]
    assert level.template_counts() == {"Corridor": 2}
    assert level.entrance_refs(1) == [EntranceRef(1, 0), EntranceRef(1, 1)]
    assert level.entrance_position(EntranceRef(1, 1)) == (1.0, 0.0, 0.0)


def test_mark_visited_reports_repeats():
    level = LevelTree()
    ref = EntranceRef(0, 0)
    assert level.mark_visited(ref) is True
    assert level.mark_visited(ref) is False
    assert level.is_visited(ref)
    assert level.visited == [ref]


def test_entrance_ref_is_a_value():
    assert EntranceRef(2, 1) == EntranceRef(2, 1)
    assert len({EntranceRef(2, 1), EntranceRef(2, 1)}) == 1
    assert str(EntranceRef(2, 1)) == "room2.e1"


def test_to_dict_is_json_serializable():
    level = _chain()
    level.warnings.append(RepeatFallback(EntranceRef(1, 0), 2, "Corridor", ("Corridor",), True))
    data = json.loads(json.dumps(level.to_dict()))
    assert [r["template"] for r in data["rooms"]] == ["Corridor", "Corridor"]
    assert data["connections"] == [{"parent": [0, 0], "child": [1, 1]}]
    assert data["rooms"][1]["entrances"] == [[3.0, 0.0, 0.0], [1.0, 0.0, 0.0]]
    assert "full catalog" in data["warnings"][0]


def test_fallback_message_names_pool():
    narrow = RepeatFallback(EntranceRef(3, 1), 5, "A", ("A", "B"))
    assert "room3.e1" in narrow.message
    assert "catalog minus 'A'" in narrow.message


# -- candidate lifecycle --

def test_pool_releases_everything_not_taken():
    factory = TrackingInstanceFactory()
    keep = build_root(corridor())
    with CandidatePool(factory) as pool:
        pool.adopt(keep)
        for x in range(3):
            pool.adopt(build_candidate(corridor(), 0, 0, (float(x), 0.0, 0.0)))
        pool.take(keep)
    assert factory.created == 4
    assert factory.released == 3
    assert list(factory.live) == [keep.handle]


def test_pool_releases_on_error():
    factory = TrackingInstanceFactory()
    with pytest.raises(RuntimeError):
        with CandidatePool(factory) as pool:
            pool.adopt(build_root(corridor()))
            raise RuntimeError("boom")
    assert factory.live_count == 0


def test_double_release_is_detected():
    factory = TrackingInstanceFactory()
    handle = factory.create(build_root(corridor()))
    factory.release(handle)
    with pytest.raises(KeyError):
        factory.release(handle)


def test_generation_leaks_nothing(cross_catalog):
    factory = TrackingInstanceFactory()
    level = LevelGenerator(cross_catalog, instance_factory=factory).generate(
        3, rng=random.Random(11))
    assert factory.live_count == len(level)
    assert set(factory.live) == {room.handle for room in level.rooms}
    assert factory.created == factory.released + len(level)
    assert factory.created == level.metadata["candidates_built"] + 1
    assert factory.released == (level.metadata["candidates_rejected"]
                                + level.metadata["candidates_discarded"])


class _ExplodingOracle(SeparatingAxisOracle):
    def penetration(self, box_a, box_b):
        raise RuntimeError("oracle down")


class _FlakyFactory(TrackingInstanceFactory):
    def __init__(self, fail_on):
        super().__init__()
        self.fail_on = fail_on

    def create(self, instance):
        if self.created + 1 == self.fail_on:
            raise RuntimeError("out of instances")
        return super().create(instance)


def test_oracle_failure_releases_candidates(cross_catalog):
    factory = TrackingInstanceFactory()
    gen = LevelGenerator(cross_catalog, overlap_oracle=_ExplodingOracle(), instance_factory=factory)
    with pytest.raises(GenerationFailedError) as excinfo:
        gen.generate(2, rng=random.Random(0))
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    # Only the committed root keeps its handle
    assert factory.live_count == 1
    assert factory.created == 2
    assert factory.released == 1


def test_factory_failure_releases_candidates(cross_catalog):
    factory = _FlakyFactory(fail_on=6)
    gen = LevelGenerator(cross_catalog, instance_factory=factory)
    with pytest.raises(GenerationFailedError):
        gen.generate(2, rng=random.Random(0))
    assert factory.live_count == 1
    assert factory.created == 5
    assert factory.released == 4
