"""TrueNAS reporting tracker (network interface throughput)."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import requests
from pydantic import BaseModel, Field

from midistatus.exceptions import TrackerConfigError, UnknownStatKeyError
from midistatus.models import AppConfig, ProfileItem, TrackerConfig

from .base import TRANSIENT_ERRORS, HttpTracker

logger = logging.getLogger(__name__)

STAT_KEYS = ("interface",)
REPORTING_PATH = "/api/v2.0/reporting/get_data"

# bar height is MB/s; reported values are kbit/s
KBITS_PER_MEGABYTE = 8000

MAX_COLOR = 7
AVERAGE_COLOR = 15
MIN_COLOR = 23


class GraphAggregations(BaseModel):
    min: dict[str, float | None] = Field(default_factory=dict)
    mean: dict[str, float | None] = Field(default_factory=dict)
    max: dict[str, float | None] = Field(default_factory=dict)


class GraphResponse(BaseModel):
    """One graph of a reporting/get_data response."""

    name: str
    identifier: str | None = None
    data: list[list[float | None]] = Field(default_factory=list)
    legend: list[str] = Field(default_factory=list)
    start: int = 0
    end: int = 0
    aggregations: GraphAggregations = Field(default_factory=GraphAggregations)


@dataclass
class SeriesStats:
    """Statistics of one legend series over the last query window."""

    legend: str
    min: float = 0.0
    mean: float = 0.0
    max: float = 0.0
    average: float = 0.0

    def __str__(self) -> str:
        return f"{self.legend}: min {self.min:.2f}, mean {self.mean:.2f}, max {self.max:.2f}, average {self.average:.2f}"


def summarize_graph(graph: GraphResponse) -> list[SeriesStats] | None:
    """
    Average every series of a graph over its data points.

    A leading ``time`` legend column is skipped. Values missing from a short
    row count as zero. Returns None when the graph has no data points.
    """
    if not graph.data:
        return None

    offset = 1 if graph.legend and graph.legend[0] == "time" else 0
    legend = graph.legend[offset:]

    sums = [0.0] * len(legend)
    for point in graph.data:
        for i in range(len(legend)):
            if i + offset < len(point):
                sums[i] += point[i + offset] or 0.0

    count = len(graph.data)
    aggregations = graph.aggregations
    return [
        SeriesStats(
            legend=name,
            min=aggregations.min.get(name) or 0.0,
            mean=aggregations.mean.get(name) or 0.0,
            max=aggregations.max.get(name) or 0.0,
            average=sums[i] / count,
        )
        for i, name in enumerate(legend)
    ]


class TrueNasTracker(HttpTracker):
    """
    Draws min/average/max network throughput bars from TrueNAS reporting.

    Each update queries the window since the end of the previous response,
    so bars reflect traffic between two polls.
    """

    name = "truenas"

    def __init__(
        self,
        app_config: AppConfig,
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(app_config.timeout, session)
        self.app_config = app_config
        self.base_url = app_config.truenas_url.rstrip("/")
        self.session.headers["Authorization"] = f"Bearer {app_config.truenas_api_key}"
        self.graphs: dict[str, list[SeriesStats]] = {}
        self._clock = clock
        self.last_query_time = int(clock()) - 60

    def init(self, scheduler, config: TrackerConfig) -> None:
        if not self.app_config.is_truenas_configured:
            raise TrackerConfigError(self.name, "'truenas_url' and 'truenas_api_key' must be set")
        self.last_query_time = int(self._clock()) - config.update_interval // 1000

    def build_query(self) -> dict:
        """Request body for the interface graph since the last query."""
        return {
            "graphs": [{"name": "interface", "identifier": self.app_config.truenas_interface}],
            "reporting_query": {"page": 1, "start": self.last_query_time, "aggregate": True},
        }

    def update(self, config: TrackerConfig) -> None:
        """
        Fetch and summarize the reporting data.

        On a timeout or connection failure the previous statistics stay.

        Raises:
            requests.HTTPError: On an error status
        """
        try:
            response = self.session.post(
                f"{self.base_url}{REPORTING_PATH}", json=self.build_query(), timeout=self.timeout
            )
        except TRANSIENT_ERRORS as e:
            logger.warning(f"TrueNAS unreachable: {e}")
            return
        response.raise_for_status()

        self.apply_response([GraphResponse.model_validate(g) for g in response.json()])

    def apply_response(self, graphs: list[GraphResponse]) -> None:
        """Store statistics from a parsed reporting response."""
        if not graphs:
            logger.warning("TrueNAS: no graphs in the response")
            return

        self.last_query_time = graphs[0].end

        for graph in graphs:
            stats = summarize_graph(graph)
            if stats is None:
                logger.warning(f"TrueNAS: no data points for {graph.name}")
                continue
            self.graphs[graph.name] = stats
            for series in stats:
                logger.debug(f"TrueNAS {graph.name} {series}")

    def display(self, driver, config: TrackerConfig) -> None:
        for item in config.items:
            if item.stat_key not in STAT_KEYS:
                raise UnknownStatKeyError(self.name, item.stat_key, STAT_KEYS)

        interface = self.graphs.get("interface")
        if not interface:
            return

        for item in config.items:
            series = interface[0] if item.stat_value == "receive" or len(interface) < 2 else interface[1]
            self._draw_series(driver, series, item)

    @staticmethod
    def _draw_series(driver, series: SeriesStats, item: ProfileItem) -> None:
        def height(value: float) -> int:
            return int(value * item.scale / KBITS_PER_MEGABYTE)

        driver.draw_bar_x(height(series.max), item.pos_x, MAX_COLOR)
        driver.draw_bar_x(height(series.average), item.pos_x, AVERAGE_COLOR, clear=False)
        driver.draw_bar_x(height(series.min), item.pos_x, MIN_COLOR, clear=False)
