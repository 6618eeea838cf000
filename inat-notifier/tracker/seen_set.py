"""
Dedup snapshot of observation UUIDs seen in the previous poll cycle.
"""
from typing import FrozenSet, Iterable, Iterator, List, Optional
from models import Observation


class SeenSet:
    """
    Immutable set of observation UUIDs from the last completed cycle.

    A cycle never mutates the live set. It collects UUIDs in a
    SnapshotBuilder and the loop swaps the built set in at the cycle
    boundary, so everything fetched during a cycle is classified against
    the same baseline.
    """

    __slots__ = ("_uuids",)

    def __init__(self, uuids: Optional[Iterable[str]] = None):
        self._uuids: FrozenSet[str] = frozenset(uuids or ())

    def is_seen(self, uuid: str) -> bool:
        return uuid in self._uuids

    def __contains__(self, uuid: object) -> bool:
        return uuid in self._uuids

    def __len__(self) -> int:
        return len(self._uuids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._uuids)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SeenSet):
            return self._uuids == other._uuids
        if isinstance(other, (set, frozenset)):
            return self._uuids == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._uuids)

    def __repr__(self) -> str:
        return f"SeenSet({len(self._uuids)} uuids)"


class SnapshotBuilder:
    """Accumulates the UUIDs of one cycle."""

    def __init__(self):
        self._uuids: set = set()

    def add(self, uuid: str) -> None:
        self._uuids.add(uuid)

    def add_all(self, observations: Iterable[Observation]) -> None:
        for observation in observations:
            self.add(observation.uuid)

    def build(self) -> SeenSet:
        return SeenSet(self._uuids)


def classify_observations(
    observations: Iterable[Observation],
    seen: SeenSet,
    first_run: bool,
) -> List[Observation]:
    """
    Pick the observations that need a notification.

    Args:
        observations: fetched observations, in fetch order
        seen: snapshot from the previous cycle
        first_run: True until the first cycle has been classified

    Returns:
        Observations absent from ``seen``, in input order. Always empty on
        the first run so startup does not flood the topic.
    """
    if first_run:
        return []
    return [o for o in observations if not seen.is_seen(o.uuid)]
