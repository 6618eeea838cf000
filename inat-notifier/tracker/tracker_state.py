"""
State schemas for the polling workflow.
"""
import operator
from dataclasses import dataclass, field
from typing import TypedDict, List, Annotated
from models import Observation, TrackedTarget
from .seen_set import SeenSet


class CycleState(TypedDict):
    """State that flows through one poll cycle."""
    # Input
    targets: List[TrackedTarget]
    seen: SeenSet  # Snapshot from the previous cycle
    first_run: bool

    # Processing
    fetched: List[Observation]  # Every observation fetched, in target order
    new_observations: List[Observation]  # Not in `seen`, empty on first run

    # Output
    next_seen: SeenSet

    # Metadata
    errors: Annotated[List[str], operator.add]  # Accumulate errors across nodes
    stats: dict  # Processing statistics


@dataclass
class RunState:
    """Process-wide state owned by the poll loop."""
    targets: List[TrackedTarget]
    seen: SeenSet = field(default_factory=SeenSet)
    first_run: bool = True
    cycles: int = 0

    def initial_cycle_state(self) -> CycleState:
        return {
            "targets": list(self.targets),
            "seen": self.seen,
            "first_run": self.first_run,
            "fetched": [],
            "new_observations": [],
            "next_seen": self.seen,
            "errors": [],
            "stats": {},
        }
