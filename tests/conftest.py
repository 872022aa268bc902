"""Shared fixtures: an in-memory Strava API stand-in with call counters."""

from collections import Counter

import pytest

from stravakit.auth import Credential
from stravakit.cache import MemoryCacheStore
from stravakit.clients.base import BaseClient
from stravakit.exceptions import NotFoundError, UnauthorizedError
from stravakit.models import (
    Activity,
    Athlete,
    ResourceState,
    Segment,
    SegmentEffort,
    Statistics,
    Stream,
    StreamResolution,
    StreamType,
)
from stravakit.services.asynchronous import shutdown_executor


class StubClient(BaseClient):
    """BaseClient backed by dicts; records every call it receives."""

    def __init__(self):
        super().__init__("stub-token")
        self.calls = Counter()
        self.last_args = {}
        self.failures = {}
        self.authenticated_athlete = Athlete(
            id=1, resource_state=ResourceState.DETAILED, firstname="Ada", lastname="Lovelace"
        )
        self.athletes = {1: self.authenticated_athlete}
        self.activities = {}
        self.segments = {}
        self.efforts = {}
        self.streams = {}
        self.private = set()
        self.friends = []
        self.koms = []
        self.starred = []

    def _record(self, name, *args):
        self.calls[name] += 1
        self.last_args[name] = args
        if name in self.failures:
            raise self.failures[name]

    @staticmethod
    def _lookup(table, key, private, kind):
        if (kind, key) in private:
            raise UnauthorizedError(f"{kind} {key} is private", status_code=401)
        if key not in table:
            raise NotFoundError(f"{kind} {key} not found", status_code=404)
        return table[key].model_copy(deep=True)

    def get_authenticated_athlete(self):
        self._record("get_authenticated_athlete")
        return self.authenticated_athlete.model_copy()

    def get_athlete(self, athlete_id):
        self._record("get_athlete", athlete_id)
        return self._lookup(self.athletes, athlete_id, self.private, "athlete")

    def get_athlete_statistics(self, athlete_id):
        self._record("get_athlete_statistics", athlete_id)
        self._lookup(self.athletes, athlete_id, self.private, "athlete")
        return Statistics(biggest_ride_distance=120000.0)

    def list_athlete_koms(self, athlete_id, page, per_page):
        self._record("list_athlete_koms", athlete_id, page, per_page)
        self._lookup(self.athletes, athlete_id, self.private, "athlete")
        return [e.model_copy() for e in self.koms]

    def list_authenticated_athlete_friends(self, page, per_page):
        self._record("list_authenticated_athlete_friends", page, per_page)
        return [a.model_copy() for a in self.friends]

    def list_athlete_friends(self, athlete_id, page, per_page):
        self._record("list_athlete_friends", athlete_id, page, per_page)
        self._lookup(self.athletes, athlete_id, self.private, "athlete")
        return [a.model_copy() for a in self.friends]

    def list_athletes_both_following(self, athlete_id, page, per_page):
        self._record("list_athletes_both_following", athlete_id, page, per_page)
        self._lookup(self.athletes, athlete_id, self.private, "athlete")
        return [a.model_copy() for a in self.friends]

    def update_authenticated_athlete(self, city, state, country, sex, weight):
        self._record("update_authenticated_athlete", city, state, country, sex, weight)
        changes = {k: v for k, v in
                   {"city": city, "state": state, "country": country, "sex": sex, "weight": weight}.items()
                   if v is not None}
        self.authenticated_athlete = self.authenticated_athlete.model_copy(update=changes)
        self.athletes[1] = self.authenticated_athlete
        return self.authenticated_athlete.model_copy()

    def get_activity(self, activity_id, include_all_efforts=False):
        self._record("get_activity", activity_id, include_all_efforts)
        return self._lookup(self.activities, activity_id, self.private, "activity")

    def list_authenticated_athlete_activities(self, before, after, page, per_page):
        self._record("list_authenticated_athlete_activities", before, after, page, per_page)
        return [
            a.model_copy(update={"resource_state": ResourceState.SUMMARY})
            for a in self.activities.values()
        ]

    def delete_activity(self, activity_id):
        self._record("delete_activity", activity_id)
        self._lookup(self.activities, activity_id, self.private, "activity")
        del self.activities[activity_id]
        return True

    def get_segment(self, segment_id):
        self._record("get_segment", segment_id)
        return self._lookup(self.segments, segment_id, self.private, "segment")

    def list_starred_segments(self, page, per_page):
        self._record("list_starred_segments", page, per_page)
        return [s.model_copy() for s in self.starred]

    def get_segment_effort(self, effort_id):
        self._record("get_segment_effort", effort_id)
        return self._lookup(self.efforts, effort_id, self.private, "segment_effort")

    def _streams(self, name, kind, parent_id, types, resolution, series_type):
        self._record(name, parent_id, types, resolution, series_type)
        if (kind, parent_id) not in self.streams:
            raise NotFoundError(f"No streams for {kind} {parent_id}", status_code=404)
        echoed = resolution or StreamResolution.HIGH
        return [
            s.model_copy(update={"resolution": echoed})
            for s in self.streams[(kind, parent_id)]
        ]

    def get_activity_streams(self, activity_id, types, resolution, series_type):
        return self._streams("get_activity_streams", "activity", activity_id, types, resolution, series_type)

    def get_effort_streams(self, effort_id, types, resolution, series_type):
        return self._streams("get_effort_streams", "segment_effort", effort_id, types, resolution, series_type)

    def get_segment_streams(self, segment_id, types, resolution, series_type):
        return self._streams("get_segment_streams", "segment", segment_id, types, resolution, series_type)


def make_streams():
    return [
        Stream(type=StreamType.TIME, data=[0, 1, 2], original_size=3),
        Stream(type=StreamType.HEARTRATE, data=[120, 125, 130], original_size=3),
    ]


@pytest.fixture(autouse=True)
def _shared_executor():
    """Give each test a fresh async pool."""
    yield
    shutdown_executor(wait=True)


@pytest.fixture
def stub_api():
    """Stub API preloaded with a public and a private activity."""
    api = StubClient()
    api.activities[100] = Activity(
        id=100, resource_state=ResourceState.DETAILED, name="Morning Run", athlete_id=1
    )
    api.activities[200] = Activity(
        id=200, resource_state=ResourceState.DETAILED, name="Hidden Ride", athlete_id=2
    )
    api.private.add(("activity", 200))
    api.segments[300] = Segment(id=300, resource_state=ResourceState.DETAILED, name="Hill Climb")
    api.efforts[400] = SegmentEffort(
        id=400,
        resource_state=ResourceState.DETAILED,
        name="Hill Climb",
        activity_id=100,
        segment=Segment(id=300, resource_state=ResourceState.SUMMARY, name="Hill Climb"),
    )
    api.streams[("activity", 100)] = make_streams()
    api.streams[("segment", 300)] = make_streams()
    api.streams[("segment_effort", 400)] = make_streams()
    return api


@pytest.fixture
def store():
    return MemoryCacheStore()


@pytest.fixture
def credential(stub_api, store):
    """Credential wired to the stub API."""
    cred = Credential("token-a", api=stub_api, store=store)
    yield cred
    cred.close()
