"""
LangGraph node functions for one poll cycle.
"""
import logging
from typing import Dict, Any
from exceptions import FetchError
from observation_fetcher import ObservationFetcher
from ntfy_notifier import NtfyNotifier
from .tracker_state import CycleState
from .seen_set import SnapshotBuilder, classify_observations

logger = logging.getLogger(__name__)


def fetch_observations_node(state: CycleState, fetcher: ObservationFetcher) -> Dict[str, Any]:
    """Fetch observations for every tracked taxon, in configured order."""
    fetched = []
    new_errors = []
    stats = state.get("stats", {})
    failed_targets = 0

    for target in state["targets"]:
        logger.info(f"Getting observations for taxon ID '{target.taxon_id}'")
        try:
            observations = fetcher.fetch(target.taxon_id, target.place_id)
        except FetchError as e:
            # The target sits this cycle out; its UUIDs leave the snapshot
            logger.error(f"Error fetching taxon ID '{target.taxon_id}': {e}")
            new_errors.append(f"Fetch error for taxon {target.taxon_id}: {str(e)}")
            failed_targets += 1
            continue

        if not observations:
            logger.info(f"No results found for taxon ID '{target.taxon_id}'")
            continue

        logger.info(f"Taxon ID '{target.taxon_id}' is the '{observations[0].display_name}'")
        fetched.extend(observations)

    return {
        "fetched": fetched,
        "errors": new_errors,  # Will be added to existing errors via operator.add
        "stats": stats | {"observations_fetched": len(fetched), "targets_failed": failed_targets}
    }


def classify_observations_node(state: CycleState) -> Dict[str, Any]:
    """Split fetched observations into new and already seen."""
    first_run = state["first_run"]
    new_observations = classify_observations(state.get("fetched", []), state["seen"], first_run)

    if first_run:
        logger.info("First run, priming the seen set without sending notifications")

    return {
        "new_observations": new_observations,
        "first_run": False,
        "stats": state.get("stats", {}) | {"new_count": len(new_observations)}
    }


def send_notifications_node(state: CycleState, notifier: NtfyNotifier) -> Dict[str, Any]:
    """Push one notification per new observation."""
    sent = 0
    failed = 0
    new_errors = []

    for observation in state.get("new_observations", []):
        logger.info(f"Sending notification for observation ID '{observation.id}'")
        try:
            delivered = notifier.send(
                observation.notification_title(),
                observation.notification_body(),
                observation.id,
            )
        except Exception as e:
            # The rest of the cycle must still rotate the snapshot
            logger.error(f"Error notifying observation {observation.id}: {e}")
            delivered = False

        if delivered:
            sent += 1
        else:
            # Still goes into the next snapshot, so it is never retried
            failed += 1
            new_errors.append(f"Notify error for observation {observation.id}")

    return {
        "errors": new_errors,
        "stats": state.get("stats", {}) | {"notifications_sent": sent, "notifications_failed": failed}
    }


def rotate_snapshot_node(state: CycleState) -> Dict[str, Any]:
    """Build the next seen set from everything fetched this cycle."""
    builder = SnapshotBuilder()
    builder.add_all(state.get("fetched", []))
    next_seen = builder.build()

    return {
        "next_seen": next_seen,
        "stats": state.get("stats", {}) | {"seen_count": len(next_seen)}
    }
