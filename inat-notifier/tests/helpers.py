"""Shared helpers and fakes for the notifier tests."""

from typing import Dict, List, Optional

from models import Observation


def observation_payload(uuid: str, obs_id: int = 1, **overrides) -> dict:
    """A /v2/observations result item shaped like the real API."""
    payload = {
        "uuid": uuid,
        "id": obs_id,
        "created_at": "2026-05-04T09:15:30-06:00",
        "created_at_details": {"date": "2026-05-04", "day": 4, "hour": 9, "month": 5, "week": 18, "year": 2026},
        "created_time_zone": "America/Denver",
        "geoprivacy": None,
        "location": "39.7392,-104.9903",
        "mappable": True,
        "obscured": False,
        "observed_on": "2026-05-03",
        "observed_on_details": {"date": "2026-05-03", "day": 3, "hour": 18, "month": 5, "week": 18, "year": 2026},
        "observed_time_zone": "America/Denver",
        "place_guess": "Denver, CO, USA",
        "quality_grade": "research",
        "taxon": {"id": 41944, "preferred_common_name": "American Black Bear"},
    }
    payload.update(overrides)
    return payload


def make_observation(uuid: str, obs_id: int = 1, **overrides) -> Observation:
    return Observation.model_validate(observation_payload(uuid, obs_id, **overrides))


class FakeFetcher:
    """Serves scripted results per taxon, one entry per cycle."""

    def __init__(self, script: Dict[int, List[object]]):
        self.script = {taxon: list(cycles) for taxon, cycles in script.items()}
        self.calls: List[tuple] = []

    def fetch(self, taxon_id: int, place_id: int) -> List[Observation]:
        self.calls.append((taxon_id, place_id))
        outcome = self.script[taxon_id].pop(0) if self.script.get(taxon_id) else []
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)


class FakeNotifier:
    """Records sends; fails for ``fail_ids`` and raises for ``raise_ids``."""

    def __init__(self, fail_ids: Optional[set] = None, raise_ids: Optional[set] = None):
        self.fail_ids = fail_ids or set()
        self.raise_ids = raise_ids or set()
        self.sent: List[tuple] = []

    def send(self, title: str, body: str, observation_id: int) -> bool:
        self.sent.append((title, body, observation_id))
        if observation_id in self.raise_ids:
            raise RuntimeError(f"unexpected failure for {observation_id}")
        return observation_id not in self.fail_ids

    @property
    def sent_ids(self) -> List[int]:
        return [observation_id for _, _, observation_id in self.sent]

