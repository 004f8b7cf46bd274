import json
from unittest.mock import Mock

import pytest

from stravatrack.core import Stravatrack
from stravatrack.filters import ActivityFilter, DateRange
from stravatrack.segments import SegmentEffort

MAY_2021 = DateRange(1619827200, 1622505600)


@pytest.fixture
def segments_config(isolated_config, tmp_path):
    segments_path = tmp_path / "segments.json"
    segments_path.write_text(json.dumps({"alias": {"Hill Climb": "The Hill"}}), encoding="utf-8")
    isolated_config.write_text(json.dumps({"segments_file": str(segments_path)}), encoding="utf-8")
    return segments_path


def test_no_token_means_no_source():
    st = Stravatrack()

    assert st.strava is None
    with pytest.raises(RuntimeError, match="STRAVA_ACCESS_TOKEN"):
        st.collect_activities([MAY_2021])


def test_token_creates_strava_provider(monkeypatch):
    monkeypatch.setenv("STRAVA_ACCESS_TOKEN", "abc")

    assert Stravatrack().strava.provider_name == "strava"


def test_parse_date_ranges_uses_home_timezone(isolated_config):
    isolated_config.write_text(json.dumps({"home_timezone": "US/Eastern"}), encoding="utf-8")

    (date_range,) = Stravatrack().parse_date_ranges(["20210501"])

    assert date_range.after == 1619827200 + 4 * 3600


def test_collect_activities(segments_config, fake_source):
    st = Stravatrack(source=fake_source)

    result = st.collect_activities([MAY_2021])

    ride, yoga = result.activities
    assert result.skipped == []
    assert ride.metadata["shoes"] == "Speedster"
    assert ride.description == "Great climb today"
    assert ride.segment_efforts == [SegmentEffort("The Hill", 185, rank=2, segment_id=11)]
    assert ride.coordinates == ((33.7, -84.3), (33.8, -84.4))
    assert yoga.metadata["mat"] == "blue"
    assert yoga.coordinates == ()


def test_collect_activities_without_details(fake_source):
    st = Stravatrack(source=fake_source)

    result = st.collect_activities([MAY_2021], details=False, coordinates=False)

    assert fake_source.detail_calls == []
    assert all(activity.description is None for activity in result.activities)


def test_collect_activities_filter_from_config(isolated_config, fake_source):
    isolated_config.write_text(json.dumps({"activity_filter": {"exclude": ["Yoga"]}}), encoding="utf-8")
    st = Stravatrack(source=fake_source)

    result = st.collect_activities([MAY_2021])

    assert [a.id for a in result.activities] == [1]
    assert fake_source.detail_calls == [1]


def test_explicit_filter_wins(isolated_config, fake_source):
    isolated_config.write_text(json.dumps({"activity_filter": {"exclude": ["Yoga"]}}), encoding="utf-8")
    st = Stravatrack(source=fake_source)

    result = st.collect_activities([MAY_2021], ActivityFilter(include=("Yoga",)))

    assert [a.id for a in result.activities] == [2]


def test_overridable_keys_from_config(isolated_config, fake_source, make_detail):
    isolated_config.write_text(json.dumps({"metadata": {"overridable_keys": ["distance"]}}), encoding="utf-8")
    fake_source.details[1] = make_detail(description="distance = 10.2 km")

    result = Stravatrack(source=fake_source).collect_activities([MAY_2021])

    assert result.activities[0].metadata["distance"] == "10.2 km"


def test_starred_segments_fetched_once(fake_source):
    fake_source.get_starred_segments = Mock(return_value=[{"name": "Hill Climb"}])
    st = Stravatrack(source=fake_source)

    st.starred_segments()
    st.starred_segments()

    assert "Hill Climb" in st.starred_segments()
    fake_source.get_starred_segments.assert_called_once()


def test_context_manager_closes_session():
    source = Mock()
    with Stravatrack(source=source):
        pass

    source.client.protocol.rsession.close.assert_called_once()
