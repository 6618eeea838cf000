"""
Observation fetcher for the iNaturalist v2 API.
Uses the public observations endpoint (no API credentials required).
"""
import requests
import logging
from typing import List, Optional
from pydantic import ValidationError
from config import Config
from exceptions import FetchParseError, FetchStatusError, FetchTransportError
from models import Observation, ObservationsResponse

logger = logging.getLogger(__name__)


class ObservationFetcher:
    """Fetches the newest observations of one taxon in one place."""

    BASE_URL = "https://api.inaturalist.org/v2/observations"
    PER_PAGE = 50
    HEADERS = {
        "User-Agent": "inat-notifier/0.1 (personal observation alerts)",
        "Accept": "application/json",
    }
    # v2 returns only the fields asked for; these are what Observation reads
    FIELDS = (
        "(created_at:!t,created_at_details:all,created_time_zone:!t,geoprivacy:!t,"
        "id:!t,location:!t,mappable:!t,obscured:!t,observed_on:!t,"
        "observed_on_details:all,observed_time_zone:!t,place_guess:!t,"
        "private_geojson:!t,quality_grade:!t,taxon:(preferred_common_name:!t))"
    )

    def __init__(self, timeout: Optional[float] = None):
        """Initialize the fetcher."""
        self.timeout = timeout if timeout is not None else Config.request_timeout()
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        logger.info("ObservationFetcher initialized")

    def _build_params(self, taxon_id: int, place_id: int) -> dict:
        return {
            "verifiable": "true",
            "order_by": "created_at",
            "order": "desc",
            "page": "1",
            "spam": "false",
            "taxon_id": str(taxon_id),
            "place_id": str(place_id),
            "locale": "en-US",
            "per_page": str(self.PER_PAGE),
            "fields": self.FIELDS,
        }

    def fetch(self, taxon_id: int, place_id: int) -> List[Observation]:
        """
        Fetch the first page of observations for a taxon, newest first.

        Args:
            taxon_id: iNaturalist taxon to look for
            place_id: iNaturalist place to restrict the search to

        Returns:
            Observations in the order the API returned them. An empty list
            means the query succeeded and matched nothing.

        Raises:
            FetchTransportError: the request did not complete
            FetchStatusError: the API answered with a non-200 status
            FetchParseError: the body was not a valid observations document
        """
        try:
            response = requests.get(
                self.BASE_URL,
                headers=self.HEADERS,
                params=self._build_params(taxon_id, place_id),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise FetchTransportError(
                f"error getting observations: {e}", taxon_id=taxon_id
            ) from e

        if response.status_code != 200:
            raise FetchStatusError(
                f"error getting observations: status code is not 200 ( {response.status_code} )",
                status_code=response.status_code,
                taxon_id=taxon_id,
            )

        try:
            data = response.json()
            page = ObservationsResponse.model_validate(data)
        except (ValueError, ValidationError) as e:
            raise FetchParseError(
                f"error unmarshalling observations: {e}", taxon_id=taxon_id
            ) from e

        logger.info(f"Fetched {len(page.results)} observations for taxon ID '{taxon_id}'")
        return page.results
