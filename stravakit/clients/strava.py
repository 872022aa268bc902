"""Strava v3 REST client implementation."""

import logging
from typing import Any, List, Optional

import requests

from stravakit.clients.base import BaseClient
from stravakit.config import Config
from stravakit.exceptions import (
    BadRequestError,
    NotFoundError,
    RateLimitExceededError,
    StravaAPIError,
    UnauthorizedError,
)
from stravakit.models import (
    Activity,
    Athlete,
    Gender,
    Segment,
    SegmentEffort,
    Statistics,
    Stream,
    StreamResolution,
    StreamSeriesDownsampling,
)

logger = logging.getLogger(__name__)


def _enum_value(value) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", value)


class StravaClient(BaseClient):
    """Client for the Strava v3 API using a bearer access token."""

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(access_token)
        self.base_url = (base_url or Config.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        })

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty)."""
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug(f"{method} {path} params={params}")
        response = self.session.request(method, url, params=params, timeout=self.timeout)
        self._raise_for_status(response, path)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _raise_for_status(response: requests.Response, path: str) -> None:
        status = response.status_code
        if status < 400:
            return

        try:
            body = response.json()
        except ValueError:
            body = response.text
        message = body.get("message") if isinstance(body, dict) else None
        detail = f"{path}: {message or response.reason or status}"

        if status == 400:
            raise BadRequestError(f"Bad request {detail}", status_code=status, response_body=body)
        if status in (401, 403):
            raise UnauthorizedError(f"Unauthorized {detail}", status_code=status, response_body=body)
        if status == 404:
            raise NotFoundError(f"Not found {detail}", status_code=status, response_body=body)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitExceededError(
                f"Rate limit exceeded {detail}",
                retry_after=float(retry_after) if retry_after else None,
                status_code=status,
                response_body=body,
            )

        logger.error(f"Strava API error {status} for {path}")
        raise StravaAPIError(f"Strava API error {status} {detail}", status_code=status, response_body=body)

    # Athletes

    def get_authenticated_athlete(self) -> Athlete:
        return Athlete.model_validate(self._request("GET", "/athlete"))

    def get_athlete(self, athlete_id: int) -> Athlete:
        return Athlete.model_validate(self._request("GET", f"/athletes/{athlete_id}"))

    def get_athlete_statistics(self, athlete_id: int) -> Statistics:
        return Statistics.model_validate(self._request("GET", f"/athletes/{athlete_id}/stats"))

    def list_athlete_koms(self, athlete_id: int, page: int, per_page: int) -> List[SegmentEffort]:
        data = self._request(
            "GET", f"/athletes/{athlete_id}/koms", {"page": page, "per_page": per_page}
        )
        return [SegmentEffort.model_validate_payload(item) for item in data or []]

    def list_authenticated_athlete_friends(self, page: int, per_page: int) -> List[Athlete]:
        data = self._request("GET", "/athlete/friends", {"page": page, "per_page": per_page})
        return [Athlete.model_validate(item) for item in data or []]

    def list_athlete_friends(self, athlete_id: int, page: int, per_page: int) -> List[Athlete]:
        data = self._request(
            "GET", f"/athletes/{athlete_id}/friends", {"page": page, "per_page": per_page}
        )
        return [Athlete.model_validate(item) for item in data or []]

    def list_athletes_both_following(self, athlete_id: int, page: int, per_page: int) -> List[Athlete]:
        data = self._request(
            "GET", f"/athletes/{athlete_id}/both-following", {"page": page, "per_page": per_page}
        )
        return [Athlete.model_validate(item) for item in data or []]

    def update_authenticated_athlete(
        self,
        city: Optional[str],
        state: Optional[str],
        country: Optional[str],
        sex: Optional[Gender],
        weight: Optional[float],
    ) -> Athlete:
        params = {
            "city": city,
            "state": state,
            "country": country,
            "sex": _enum_value(sex),
            "weight": weight,
        }
        return Athlete.model_validate(self._request("PUT", "/athlete", params))

    # Activities

    def get_activity(self, activity_id: int, include_all_efforts: bool = False) -> Activity:
        params = {"include_all_efforts": "true"} if include_all_efforts else None
        return Activity.model_validate_payload(
            self._request("GET", f"/activities/{activity_id}", params)
        )

    def list_authenticated_athlete_activities(
        self, before: Optional[int], after: Optional[int], page: int, per_page: int
    ) -> List[Activity]:
        params = {"before": before, "after": after, "page": page, "per_page": per_page}
        data = self._request("GET", "/athlete/activities", params)
        return [Activity.model_validate_payload(item) for item in data or []]

    def delete_activity(self, activity_id: int) -> bool:
        self._request("DELETE", f"/activities/{activity_id}")
        logger.info(f"Deleted activity {activity_id}")
        return True

    # Segments and efforts

    def get_segment(self, segment_id: int) -> Segment:
        return Segment.model_validate(self._request("GET", f"/segments/{segment_id}"))

    def list_starred_segments(self, page: int, per_page: int) -> List[Segment]:
        data = self._request("GET", "/segments/starred", {"page": page, "per_page": per_page})
        return [Segment.model_validate(item) for item in data or []]

    def get_segment_effort(self, effort_id: int) -> SegmentEffort:
        return SegmentEffort.model_validate_payload(
            self._request("GET", f"/segment_efforts/{effort_id}")
        )

    # Streams

    def _get_streams(
        self,
        path: str,
        types: str,
        resolution: Optional[StreamResolution],
        series_type: Optional[StreamSeriesDownsampling],
    ) -> List[Stream]:
        params = {
            "resolution": _enum_value(resolution),
            "series_type": _enum_value(series_type),
        }
        data = self._request("GET", f"{path}/streams/{types}", params)
        return [Stream.model_validate(item) for item in data or []]

    def get_activity_streams(self, activity_id, types, resolution, series_type) -> List[Stream]:
        return self._get_streams(f"/activities/{activity_id}", types, resolution, series_type)

    def get_effort_streams(self, effort_id, types, resolution, series_type) -> List[Stream]:
        return self._get_streams(f"/segment_efforts/{effort_id}", types, resolution, series_type)

    def get_segment_streams(self, segment_id, types, resolution, series_type) -> List[Stream]:
        return self._get_streams(f"/segments/{segment_id}", types, resolution, series_type)

    def close(self) -> None:
        self.session.close()
