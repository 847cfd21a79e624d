"""
Room instance lifecycle.

The placement engine never owns a scene or renderer. Whenever it constructs a
candidate it asks an InstanceFactory to materialize the external
representation, and it releases that representation once the candidate is
rejected or loses the random selection. Committed rooms keep their handle.
"""

from __future__ import annotations
import itertools
import logging
from typing import Any, Dict, List, Protocol

logger = logging.getLogger(__name__)


class InstanceFactory(Protocol):
    """Capability to materialize and release a room instance's external object."""

    def create(self, instance) -> Any:
        ...

    def release(self, handle: Any) -> None:
        ...


class TrackingInstanceFactory:
    """Factory that only hands out integer handles and keeps an audit trail.

    Used as the default factory and in tests: after a run, ``live`` must equal
    the set of committed rooms' handles.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self.live: Dict[int, str] = {}
        self.created = 0
        self.released = 0

    def create(self, instance) -> int:
        handle = next(self._counter)
        self.live[handle] = instance.template_id
        self.created += 1
        return handle

    def release(self, handle: int) -> None:
        if handle not in self.live:
            raise KeyError(f"Handle {handle} released twice or never created")
        del self.live[handle]
        self.released += 1

    @property
    def live_count(self) -> int:
        return len(self.live)


class CandidatePool:
    """Owns the transient candidates of one placement step.

    Every candidate added here is released exactly once unless it is taken
    out with ``take()``. Use as a context manager so release also happens when
    a collaborator raises.
    """

    def __init__(self, factory: InstanceFactory):
        self._factory = factory
        self._owned: List = []

    def __enter__(self) -> 'CandidatePool':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.release_all()
        return False

    def adopt(self, instance) -> None:
        """Materialize a freshly built candidate and take ownership of it."""
        instance.handle = self._factory.create(instance)
        self._owned.append(instance)

    def discard(self, instance) -> None:
        """Release one owned candidate immediately."""
        self._owned.remove(instance)
        self._factory.release(instance.handle)
        instance.handle = None

    def take(self, instance) -> None:
        """Transfer ownership of a candidate out of the pool (commit)."""
        self._owned.remove(instance)

    def release_all(self) -> None:
        while self._owned:
            instance = self._owned.pop()
            self._factory.release(instance.handle)
            instance.handle = None

    def __len__(self) -> int:
        return len(self._owned)
