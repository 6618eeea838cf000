"""
Build and configure the poll cycle workflow.
"""
from functools import partial
from langgraph.graph import StateGraph, END
from observation_fetcher import ObservationFetcher
from ntfy_notifier import NtfyNotifier
from .tracker_state import CycleState
from .tracker_nodes import (
    fetch_observations_node,
    classify_observations_node,
    send_notifications_node,
    rotate_snapshot_node
)


def build_tracker_graph(fetcher: ObservationFetcher, notifier: NtfyNotifier):
    """Build the LangGraph workflow for a single poll cycle."""

    # Create the graph
    workflow = StateGraph(CycleState)

    # Add nodes
    workflow.add_node("fetch_observations", partial(fetch_observations_node, fetcher=fetcher))
    workflow.add_node("classify_observations", classify_observations_node)
    workflow.add_node("send_notifications", partial(send_notifications_node, notifier=notifier))
    workflow.add_node("rotate_snapshot", rotate_snapshot_node)

    # Define edges
    workflow.set_entry_point("fetch_observations")
    workflow.add_edge("fetch_observations", "classify_observations")
    workflow.add_edge("classify_observations", "send_notifications")
    workflow.add_edge("send_notifications", "rotate_snapshot")
    workflow.add_edge("rotate_snapshot", END)

    # Compile the graph
    app = workflow.compile()

    return app
