"""
Main entry point for the iNaturalist notifier.
"""
import logging
import sys
import time
from typing import Callable, List, Optional

from config import Config
from exceptions import ConfigError
from models import TrackedTarget
from observation_fetcher import ObservationFetcher
from ntfy_notifier import NtfyNotifier
from tracker import RunState, build_tracker_graph

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Log to stdout only; the notifier keeps no files."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


class ObservationTracker:
    """Main orchestrator for the poll loop."""

    def __init__(
        self,
        targets: List[TrackedTarget],
        fetcher: ObservationFetcher,
        notifier: NtfyNotifier,
        poll_interval: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the tracker with its collaborators."""
        self.state = RunState(targets=list(targets))
        self.workflow = build_tracker_graph(fetcher, notifier)
        self.poll_interval = poll_interval if poll_interval is not None else Config.poll_interval()
        self._sleep = sleep
        logger.info(f"ObservationTracker initialized with {len(self.state.targets)} taxa")

    @classmethod
    def from_config(cls) -> "ObservationTracker":
        """
        Build a tracker from Config.

        Raises:
            ConfigError: if any required setting is missing or invalid
        """
        Config.validate()
        place_id = Config.place_id()
        targets = [TrackedTarget(taxon_id=t, place_id=place_id) for t in Config.taxon_ids()]
        return cls(
            targets=targets,
            fetcher=ObservationFetcher(timeout=Config.request_timeout()),
            notifier=NtfyNotifier(Config.NTFY_URL, Config.NTFY_TOKEN, timeout=Config.request_timeout()),
        )

    def run_cycle(self) -> dict:
        """
        Run a single poll cycle.

        Returns:
            The cycle's stats
        """
        logger.info("=" * 60)
        logger.info(f"Starting poll cycle {self.state.cycles + 1}")
        logger.info("=" * 60)

        result = self.workflow.invoke(self.state.initial_cycle_state())

        # Replace, never merge: observations not fetched this cycle drop out
        self.state.seen = result["next_seen"]
        self.state.first_run = result["first_run"]
        self.state.cycles += 1

        stats = result.get("stats", {})
        for error in result.get("errors", []):
            logger.warning(error)
        logger.info(
            f"Cycle complete: {stats.get('observations_fetched', 0)} fetched, "
            f"{stats.get('notifications_sent', 0)} notified, "
            f"{stats.get('notifications_failed', 0)} failed, "
            f"{len(self.state.seen)} tracked"
        )
        return stats

    def run_forever(self, max_cycles: Optional[int] = None):
        """Poll until the process is stopped, sleeping between cycles."""
        completed = 0
        while max_cycles is None or completed < max_cycles:
            try:
                self.run_cycle()
            except Exception as e:
                logger.exception(f"Poll cycle failed, keeping previous seen set: {e}")
            completed += 1
            if max_cycles is not None and completed >= max_cycles:
                break
            logger.info(f"Sleeping {self.poll_interval} seconds until next cycle")
            self._sleep(self.poll_interval)


def main() -> int:
    """Main entry point."""
    setup_logging(Config.LOG_LEVEL)
    try:
        tracker = ObservationTracker.from_config()
    except ConfigError as e:
        logger.error(f"ERROR: {e}")
        return 1

    try:
        tracker.run_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping")
    return 0


if __name__ == "__main__":
    sys.exit(main())
