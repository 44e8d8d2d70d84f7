"""Unit tests for the metric sources."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock, call

import pytest
import requests

from midistatus.exceptions import TrackerConfigError, UnknownStatKeyError
from midistatus.models import AppConfig, ProfileItem, TrackerConfig, TrackerType
from midistatus.trackers import JellyfinTracker, PingTracker, Tracker, TrueNasTracker
from midistatus.trackers.jellyfin import count_active_sessions, parse_activity_date
from midistatus.trackers.truenas import GraphResponse, summarize_graph


@pytest.fixture
def session():
    mock = Mock(spec=requests.Session)
    mock.headers = {}
    return mock


@pytest.fixture
def driver():
    return Mock()


def response(ok=True, status_code=200, payload=None):
    mock = Mock()
    mock.ok = ok
    mock.status_code = status_code
    mock.json.return_value = payload
    return mock


@pytest.mark.unit
class TestPingTracker:

    @pytest.fixture
    def tracker(self, session):
        return PingTracker(AppConfig(ping_timeout=1500), session=session)

    @pytest.fixture
    def entry(self):
        return TrackerConfig(
            tracker_type=TrackerType.PING,
            items=[ProfileItem(stat_key="http://nas.local", pos_x=2, pos_y=3)],
        )

    def test_is_a_tracker(self, tracker):
        assert isinstance(tracker, Tracker)

    def test_init_normalizes_colors(self, tracker):
        entry = TrackerConfig(tracker_type=TrackerType.PING, items=[
            ProfileItem(stat_key="http://a"),
            ProfileItem(stat_key="http://b", colors=[21]),
            ProfileItem(stat_key="http://c", colors=[5, 9]),
        ])

        tracker.init(None, entry)

        assert [item.colors for item in entry.items] == [[0, 3], [0, 21], [5, 9]]
        assert all(item.size == 0 for item in entry.items)

    def test_init_requires_url(self, tracker):
        entry = TrackerConfig(tracker_type=TrackerType.PING, items=[ProfileItem()])
        with pytest.raises(TrackerConfigError):
            tracker.init(None, entry)

    def test_success_lights_second_color(self, tracker, entry, session, driver):
        session.get.return_value = response(ok=True)
        tracker.init(None, entry)

        tracker.update(entry)
        tracker.display(driver, entry)

        session.get.assert_called_once_with("http://nas.local", timeout=1.5)
        driver.set_pixel.assert_called_once_with(2, 3, 3)

    @pytest.mark.parametrize("outcome", [
        requests.ConnectionError("refused"),
        requests.Timeout("slow"),
        response(ok=False, status_code=503),
    ])
    def test_failure_lights_first_color(self, tracker, entry, session, driver, outcome):
        if isinstance(outcome, Exception):
            session.get.side_effect = outcome
        else:
            session.get.return_value = outcome
        tracker.init(None, entry)
        entry.items[0].size = 1

        tracker.update(entry)
        tracker.display(driver, entry)

        assert entry.items[0].size == 0
        driver.set_pixel.assert_called_once_with(2, 3, 0)

    def test_unexpected_errors_propagate(self, tracker, entry, session):
        session.get.side_effect = requests.exceptions.InvalidURL("nope")
        tracker.init(None, entry)

        with pytest.raises(requests.exceptions.InvalidURL):
            tracker.update(entry)


@pytest.mark.unit
class TestJellyfinTracker:

    @pytest.fixture
    def tracker(self, app_config, session):
        return JellyfinTracker(app_config, session=session)

    @pytest.fixture
    def entry(self):
        return TrackerConfig(
            tracker_type=TrackerType.JELLYFIN,
            items=[ProfileItem(stat_key="active_users", pos_x=8)],
        )

    def test_parse_activity_date_truncates_fraction(self):
        parsed = parse_activity_date("2024-05-01T12:00:00.1234567Z")
        assert parsed == datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "yesterday"])
    def test_parse_activity_date_invalid(self, value):
        assert parse_activity_date(value) is None

    def test_count_active_sessions(self):
        now = datetime(2024, 5, 1, 12, 0, 10, tzinfo=timezone.utc)
        sessions = [
            {"LastActivityDate": "2024-05-01T12:00:08.0000000Z"},
            {"LastActivityDate": "2024-05-01T12:00:05.0000000Z"},
            {"LastActivityDate": "2024-05-01T11:00:00.0000000Z"},
            {"UserName": "no activity"},
        ]
        assert count_active_sessions(sessions, 5000, now) == 2

    def test_session_headers(self, tracker, session):
        assert session.headers["X-Emby-Token"] == "jf-key"
        assert tracker.base_url == "http://jellyfin:8096"

    def test_update_counts_recent_sessions(self, tracker, entry, session):
        now = datetime.now(timezone.utc)
        session.get.return_value = response(payload=[
            {"LastActivityDate": (now - timedelta(seconds=1)).isoformat()},
            {"LastActivityDate": (now - timedelta(hours=1)).isoformat()},
        ])

        tracker.update(entry)

        session.get.assert_called_once_with("http://jellyfin:8096/Sessions", timeout=2.0)
        assert tracker.active_user_count == 1

    def test_timeout_counts_as_zero(self, tracker, entry, session):
        tracker.active_user_count = 3
        session.get.side_effect = requests.Timeout()

        tracker.update(entry)
        assert tracker.active_user_count == 0

    def test_error_status_propagates(self, tracker, entry, session):
        failed = response(ok=False, status_code=401)
        failed.raise_for_status.side_effect = requests.HTTPError("401")
        session.get.return_value = failed

        with pytest.raises(requests.HTTPError):
            tracker.update(entry)

    def test_display_draws_only_on_change(self, tracker, entry, driver):
        tracker.active_user_count = 2
        tracker.display(driver, entry)
        tracker.display(driver, entry)

        driver.draw_bar_x.assert_called_once_with(2, 8)

        tracker.active_user_count = 0
        tracker.display(driver, entry)
        assert driver.draw_bar_x.call_args == call(0, 8)

    def test_unknown_stat_key_raises(self, tracker, driver):
        entry = TrackerConfig(tracker_type=TrackerType.JELLYFIN, items=[ProfileItem(stat_key="streams")])
        with pytest.raises(UnknownStatKeyError):
            tracker.display(driver, entry)

    def test_init_requires_configuration(self, session, entry):
        tracker = JellyfinTracker(AppConfig(), session=session)
        with pytest.raises(TrackerConfigError):
            tracker.init(None, entry)


REPORTING_RESPONSE = [
    {
        "name": "interface",
        "identifier": "enp2s0",
        "data": [[1000, 8000, 2000], [1010, 24000, 6000]],
        "legend": ["time", "received", "sent"],
        "start": 1000,
        "end": 1060,
        "aggregations": {
            "min": {"received": 8000, "sent": 2000},
            "mean": {"received": 16000, "sent": 4000},
            "max": {"received": 40000, "sent": 6000},
        },
    }
]


@pytest.mark.unit
class TestTrueNasTracker:

    @pytest.fixture
    def tracker(self, app_config, session):
        return TrueNasTracker(app_config, session=session, clock=lambda: 1_000_000.0)

    @pytest.fixture
    def entry(self):
        return TrackerConfig(
            tracker_type=TrackerType.TRUENAS,
            update_interval=30000,
            items=[ProfileItem(stat_key="interface", stat_value="receive", pos_x=3)],
        )

    def test_summarize_skips_time_column(self):
        stats = summarize_graph(GraphResponse.model_validate(REPORTING_RESPONSE[0]))

        assert [s.legend for s in stats] == ["received", "sent"]
        assert stats[0].average == 16000
        assert stats[1].average == 4000
        assert (stats[0].min, stats[0].mean, stats[0].max) == (8000, 16000, 40000)

    def test_summarize_short_row_counts_missing_values_as_zero(self):
        graph = GraphResponse(name="interface", legend=["time", "received", "sent"], data=[[1.0, 5.0], [2.0, 7.0, 4.0]])

        stats = summarize_graph(graph)

        assert stats[0].average == 6.0
        assert stats[1].average == 2.0

    def test_summarize_without_data(self):
        assert summarize_graph(GraphResponse(name="interface")) is None

    def test_init_sets_query_window(self, tracker, entry):
        tracker.init(None, entry)
        assert tracker.build_query() == {
            "graphs": [{"name": "interface", "identifier": "enp2s0"}],
            "reporting_query": {"page": 1, "start": 999_970, "aggregate": True},
        }

    def test_update_posts_query_and_advances_window(self, tracker, entry, session):
        session.post.return_value = response(payload=REPORTING_RESPONSE)
        tracker.init(None, entry)

        tracker.update(entry)

        args, kwargs = session.post.call_args
        assert args[0] == "http://truenas/api/v2.0/reporting/get_data"
        assert kwargs["json"]["reporting_query"]["start"] == 999_970
        assert session.headers["Authorization"] == "Bearer tn-key"
        assert tracker.last_query_time == 1060
        assert "interface" in tracker.graphs

    def test_timeout_keeps_previous_stats(self, tracker, entry, session):
        session.post.return_value = response(payload=REPORTING_RESPONSE)
        tracker.update(entry)
        session.post.side_effect = requests.ConnectionError()

        tracker.update(entry)
        assert tracker.graphs["interface"][0].average == 16000

    def test_display_draws_layered_bars(self, tracker, entry, driver):
        tracker.apply_response([GraphResponse.model_validate(g) for g in REPORTING_RESPONSE])

        tracker.display(driver, entry)

        assert driver.draw_bar_x.call_args_list == [
            call(5, 3, 7),
            call(2, 3, 15, clear=False),
            call(1, 3, 23, clear=False),
        ]

    def test_display_sent_series_with_scale(self, tracker, driver):
        tracker.apply_response([GraphResponse.model_validate(g) for g in REPORTING_RESPONSE])
        entry = TrackerConfig(tracker_type=TrackerType.TRUENAS, items=[
            ProfileItem(stat_key="interface", stat_value="sent", pos_x=5, scale=10.0),
        ])

        tracker.display(driver, entry)

        assert driver.draw_bar_x.call_args_list == [
            call(7, 5, 7),
            call(5, 5, 15, clear=False),
            call(2, 5, 23, clear=False),
        ]

    def test_display_without_data_draws_nothing(self, tracker, entry, driver):
        tracker.display(driver, entry)
        driver.draw_bar_x.assert_not_called()

    def test_unknown_stat_key_raises(self, tracker, driver):
        entry = TrackerConfig(tracker_type=TrackerType.TRUENAS, items=[ProfileItem(stat_key="cpu")])
        with pytest.raises(UnknownStatKeyError):
            tracker.display(driver, entry)
