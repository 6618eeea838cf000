"""
Poll cycle workflow package for the iNaturalist notifier.
"""
from .tracker_builder import build_tracker_graph
from .tracker_state import CycleState, RunState
from .seen_set import SeenSet, SnapshotBuilder, classify_observations

__all__ = [
    'build_tracker_graph',
    'CycleState',
    'RunState',
    'SeenSet',
    'SnapshotBuilder',
    'classify_observations',
]
