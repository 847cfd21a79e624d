"""
Placement engine: recursively grows a level from room templates.

Starting from a root room at the origin, every entrance is filled by trying
each candidate template at each rotation step through each of its sockets,
discarding candidates that penetrate an already committed room, and
committing one survivor chosen uniformly at random. The committed room's
entrances are then filled in turn, depth-first, until the depth budget runs
out.

Termination: an entrance is processed at most once (visited set), every
recursive call that does further work strictly decreases the remaining
depth, and templates have finitely many sockets.

Reproducibility: all randomness comes from the ``rng`` passed to
``generate()``; candidates are enumerated in catalog, rotation and socket
order, so the same catalog, settings and seed give the same level.
"""

from __future__ import annotations
import logging
import random
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..errors import EmptyCatalogError, GenerationFailedError, LevelGenerationError
from ..layout.level_tree import EntranceRef, LevelTree, RepeatFallback, RoomInstance
from ..layout.spatial import OverlapOracle, SeparatingAxisOracle
from ..layout.transforms import rotation_steps
from ..rooms.base import RoomTemplate
from ..rooms.catalog import RoomTemplateCatalog
from .candidate_builder import build_candidate, build_root
from .lifecycle import CandidatePool, InstanceFactory, TrackingInstanceFactory

logger = logging.getLogger(__name__)

# Rooms may touch or graze each other by this much; anything deeper is an overlap
DEFAULT_OVERLAP_TOLERANCE = 0.05

History = Tuple[str, ...]


class LevelGenerator:
    """Assembles levels from a fixed room template catalog.

    Collaborators are injected: the overlap oracle decides whether two rooms
    collide, the instance factory materializes and releases each candidate's
    external object. Both default to in-process implementations.
    """

    def __init__(
        self,
        catalog: Union[RoomTemplateCatalog, Sequence[RoomTemplate]],
        overlap_oracle: Optional[OverlapOracle] = None,
        instance_factory: Optional[InstanceFactory] = None,
        overlap_tolerance: float = DEFAULT_OVERLAP_TOLERANCE,
    ):
        """
        Args:
            catalog: Room templates; a plain sequence is wrapped in a catalog
            overlap_oracle: Penetration depth oracle (default: separating axis test)
            instance_factory: Candidate lifecycle hooks (default: tracking factory)
            overlap_tolerance: Maximum allowed penetration between committed rooms

        Raises:
            EmptyCatalogError: If the catalog holds no templates
        """
        if catalog is None:
            raise EmptyCatalogError()
        if not isinstance(catalog, RoomTemplateCatalog):
            catalog = RoomTemplateCatalog(catalog)
        if overlap_tolerance < 0:
            raise ValueError(f"overlap_tolerance must be >= 0, got {overlap_tolerance}")

        self.catalog = catalog
        self.overlap_oracle = overlap_oracle or SeparatingAxisOracle()
        self.instance_factory = instance_factory or TrackingInstanceFactory()
        self.overlap_tolerance = overlap_tolerance

    def generate(
        self,
        depth: int,
        rotate_enabled: bool = True,
        max_repeat: int = 0,
        rng: Optional[random.Random] = None,
        root_template_id: Optional[str] = None,
        random_root: bool = False,
    ) -> LevelTree:
        """Generate one level.

        Args:
            depth: Number of placement levels below the root (0 = root only)
            rotate_enabled: Try all four quarter-turn rotations per candidate
            max_repeat: Size of the per-branch repeat window (0 disables it)
            rng: Random source; pass a seeded random.Random for reproducible runs
            root_template_id: Template for the root room (default: first in catalog)
            random_root: Pick the root template with ``rng`` instead

        Returns:
            Frozen LevelTree

        Raises:
            ValueError: On negative depth or max_repeat
            CatalogError: If root_template_id is unknown
            GenerationFailedError: If the overlap oracle or instance factory fails
        """
        if depth < 0:
            raise ValueError(f"depth must be >= 0, got {depth}")
        if max_repeat < 0:
            raise ValueError(f"max_repeat must be >= 0, got {max_repeat}")

        if rng is None:
            rng = random.Random()

        if root_template_id is not None:
            root_template = self.catalog.require(root_template_id)
        elif random_root:
            root_template = rng.choice(self.catalog.templates())
        else:
            root_template = self.catalog.templates()[0]

        run = _PlacementRun(self, rotate_enabled, max_repeat, rng)
        try:
            level = run.execute(root_template, depth)
        except LevelGenerationError:
            raise
        except Exception as e:
            logger.error(f"Generation aborted after {len(run.level)} room(s): {e}")
            raise GenerationFailedError(f"Level generation failed: {e}") from e

        level.metadata.update({
            'depth': depth,
            'rotate_enabled': rotate_enabled,
            'max_repeat': max_repeat,
            'overlap_tolerance': self.overlap_tolerance,
            'candidates_built': run.candidates_built,
            'candidates_rejected': run.candidates_rejected,
            'candidates_discarded': run.candidates_discarded,
        })
        level.freeze()
        logger.info(
            f"Generated {len(level)} room(s) from root '{root_template.template_id}' "
            f"(depth={depth}, dead ends={len(level.dead_ends)}, "
            f"fallbacks={len(level.warnings)})"
        )
        return level


class _PlacementRun:
    """State of one in-progress generation: the tree, the RNG and counters."""

    def __init__(self, generator: LevelGenerator, rotate_enabled: bool,
                 max_repeat: int, rng: random.Random):
        self.catalog = generator.catalog
        self.oracle = generator.overlap_oracle
        self.factory = generator.instance_factory
        self.tolerance = generator.overlap_tolerance
        self.steps = rotation_steps(rotate_enabled)
        self.max_repeat = max_repeat
        self.rng = rng
        self.level = LevelTree()

        self.candidates_built = 0
        self.candidates_rejected = 0
        self.candidates_discarded = 0

    def execute(self, root_template: RoomTemplate, depth: int) -> LevelTree:
        root = build_root(root_template)
        root.handle = self.factory.create(root)
        self.level.commit(root)
        logger.debug(f"Placed root {root.describe()}")

        history = self._advance_history((), root_template.template_id)
        if depth > 0:
            for ref in self.level.entrance_refs(root.index):
                self._place_at(ref, root_template.template_id, depth - 1, history)
        return self.level

    # -- recursion --

    def _place_at(self, target: EntranceRef, source_template_id: str,
                  remaining_depth: int, history: History) -> None:
        if not self.level.mark_visited(target):
            logger.debug(f"Skipping {target}: already visited")
            return

        templates = self._candidate_templates(target, source_template_id, history)
        target_position = self.level.room(target.room_index).entrance_world(target.socket_index)

        with CandidatePool(self.factory) as pool:
            survivors = self._evaluate(templates, target_position, pool)
            if not survivors:
                logger.debug(f"Dead end at {target}: no candidate fits")
                self.level.dead_ends.append(target)
                return

            chosen, socket_index = survivors[self.rng.randrange(len(survivors))]
            pool.take(chosen)
            self.candidates_discarded += len(pool)
            pool.release_all()

        self.level.commit(chosen)
        self.level.connect(target, EntranceRef(chosen.index, socket_index))
        logger.debug(f"Placed {chosen.describe()} at {target} "
                     f"({len(survivors)} survivor(s))")

        if remaining_depth > 0:
            child_history = self._advance_history(history, chosen.template_id)
            for ref in self.level.entrance_refs(chosen.index):
                self._place_at(ref, chosen.template_id, remaining_depth - 1, child_history)

    def _candidate_templates(self, target: EntranceRef, source_template_id: str,
                             history: History) -> List[RoomTemplate]:
        if self.max_repeat <= 0:
            return list(self.catalog)

        excluded = tuple(dict.fromkeys((source_template_id,) + history))
        candidates = [t for t in self.catalog if t.template_id not in excluded]
        if candidates:
            return candidates

        # The repeat window ate the whole catalog; fall back rather than stall
        candidates = [t for t in self.catalog if t.template_id != source_template_id]
        used_source = not candidates
        if used_source:
            candidates = list(self.catalog)

        fallback = RepeatFallback(
            entrance=target,
            step=len(self.level),
            source_template_id=source_template_id,
            excluded=excluded,
            used_source=used_source,
        )
        self.level.warnings.append(fallback)
        logger.warning(fallback.message)
        return candidates

    def _evaluate(self, templates: Iterable[RoomTemplate], target_position,
                  pool: CandidatePool) -> List[Tuple[RoomInstance, int]]:
        survivors: List[Tuple[RoomInstance, int]] = []
        for template in templates:
            for step in self.steps:
                for socket_index in range(template.entrance_count):
                    candidate = build_candidate(template, step, socket_index, target_position)
                    pool.adopt(candidate)
                    self.candidates_built += 1
                    if self._overlaps_committed(candidate):
                        pool.discard(candidate)
                        self.candidates_rejected += 1
                        continue
                    survivors.append((candidate, socket_index))
        return survivors

    def _overlaps_committed(self, candidate: RoomInstance) -> bool:
        box = candidate.world_box()
        for room in self.level.rooms:
            if self.oracle.penetration(box, room.world_box()) > self.tolerance:
                return True
        return False

    def _advance_history(self, history: History, template_id: str) -> History:
        if self.max_repeat <= 0:
            return ()
        return (history + (template_id,))[-self.max_repeat:]


def generate(
    catalog: Union[RoomTemplateCatalog, Sequence[RoomTemplate]],
    depth: int,
    rotate_enabled: bool = True,
    max_repeat: int = 0,
    rng: Optional[random.Random] = None,
    overlap_oracle: Optional[OverlapOracle] = None,
    instance_factory: Optional[InstanceFactory] = None,
    root_template_id: Optional[str] = None,
    overlap_tolerance: float = DEFAULT_OVERLAP_TOLERANCE,
) -> LevelTree:
    """Convenience wrapper: build a LevelGenerator and run it once."""
    generator = LevelGenerator(
        catalog,
        overlap_oracle=overlap_oracle,
        instance_factory=instance_factory,
        overlap_tolerance=overlap_tolerance,
    )
    return generator.generate(
        depth,
        rotate_enabled=rotate_enabled,
        max_repeat=max_repeat,
        rng=rng,
        root_template_id=root_template_id,
    )
