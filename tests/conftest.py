import pytest

from stravatrack.providers.base_provider import ActivitySource


@pytest.fixture
def make_summary():
    """Build a summary activity record, overriding any field by keyword."""

    def _make(**overrides):
        record = {
            "id": 1,
            "commute": False,
            "type": "Ride",
            "name": "Morning Ride",
            "distance": 10000,
            "total_elevation_gain": 120.5,
            "moving_time": 1800,
            "elapsed_time": 2000,
            "start_date": "2021-05-01T10:00:00Z",
            "start_date_local": "2021-05-01T12:00:00Z",
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def make_detail():
    """Build a detailed activity record for activity 1."""

    def _make(**overrides):
        record = {
            "id": 1,
            "description": "shoes = Speedster\nGreat climb today",
            "segment_efforts": [
                {"name": "Hill Climb", "elapsed_time": 185, "pr_rank": 2, "segment": {"id": 11}},
                {"name": "Other Climb", "elapsed_time": 240, "segment": {"id": 12}},
            ],
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from any stravatrack_config.json in the working tree."""
    import stravatrack.appconfig as appconfig

    monkeypatch.setattr(appconfig, "_FILE_PATHS", [tmp_path / "stravatrack_config.json"])
    monkeypatch.delenv("STRAVATRACK_DEBUG", raising=False)
    monkeypatch.delenv("STRAVA_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("STRAVA_CLIENT_ID", raising=False)
    monkeypatch.delenv("STRAVA_CLIENT_SECRET", raising=False)
    return tmp_path / "stravatrack_config.json"


class FakeSource(ActivitySource):
    """In-memory activity source keyed by activity id."""

    def __init__(self, summaries, details=None, coordinates=None, starred=None):
        super().__init__()
        self.summaries = summaries
        self.details = details or {}
        self.coordinates = coordinates or {}
        self.starred = starred or []
        self.detail_calls = []

    @property
    def provider_name(self):
        return "fake"

    def get_athlete(self):
        return {"id": 7, "firstname": "Ada", "lastname": "Lovelace"}

    def get_activities(self, date_range):
        return list(self.summaries)

    def get_activity_detail(self, activity_id):
        self.detail_calls.append(activity_id)
        return self.details.get(activity_id)

    def get_starred_segments(self):
        return list(self.starred)

    def get_coordinates(self, activity_id):
        return self.coordinates.get(activity_id, [])


@pytest.fixture
def fake_source(make_summary, make_detail):
    """A source with one ride (with a track) and one yoga session."""
    return FakeSource(
        summaries=[
            make_summary(id=2, type="Yoga", name="Stretch", start_date="2021-05-02T10:00:00Z"),
            make_summary(),
        ],
        details={1: make_detail(), 2: make_detail(id=2, description="mat = blue", segment_efforts=[])},
        coordinates={1: [[33.7, -84.3], [33.8, -84.4]]},
        starred=[{"id": 11, "name": "Hill Climb", "distance": 1200.0}],
    )
