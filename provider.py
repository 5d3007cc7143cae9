import asyncio
import logging
import random
from typing import Dict, Iterable, Optional, Protocol

from config import get_green_probability, get_simulated_latency
from errors import FetchError
from schemas import Metrics

logger = logging.getLogger(__name__)

# Simulated page ranges
MIN_PAGE_BYTES = 500_000
MAX_PAGE_BYTES = 2_500_000
MIN_REQUESTS, MAX_REQUESTS = 20, 100
MIN_LOAD_MS, MAX_LOAD_MS = 1000, 4000


class MetricsProvider(Protocol):
    async def fetch_metrics(self, url: str) -> Metrics:
        ...


class SimulatedMetricsProvider:
    """Stand-in for a page-weight crawler: fixed latency, random page figures."""

    def __init__(self, latency: Optional[float] = None, green_probability: Optional[float] = None,
                 rng: Optional[random.Random] = None):
        self.latency = get_simulated_latency() if latency is None else latency
        self.green_probability = get_green_probability() if green_probability is None else green_probability
        self.rng = rng or random.Random()

    async def fetch_metrics(self, url: str) -> Metrics:
        logger.debug('Simulating metrics fetch for %s (%.2fs)', url, self.latency)
        await asyncio.sleep(self.latency)
        return Metrics(
            byte_size=round(self.rng.uniform(MIN_PAGE_BYTES, MAX_PAGE_BYTES)),
            request_count=self.rng.randint(MIN_REQUESTS, MAX_REQUESTS),
            load_time_ms=self.rng.randint(MIN_LOAD_MS, MAX_LOAD_MS),
            is_green_hosting=self.rng.random() < self.green_probability,
        )


class StaticMetricsProvider:
    """Serves canned metrics per URL; unknown or failing URLs raise FetchError."""

    def __init__(self, metrics: Dict[str, Metrics], failing: Iterable[str] = (), latency: float = 0.0,
                 delays: Optional[Dict[str, float]] = None):
        self.metrics = dict(metrics)
        self.failing = set(failing)
        self.latency = latency
        self.delays = dict(delays or {})
        self.calls = []

    async def fetch_metrics(self, url: str) -> Metrics:
        self.calls.append(url)
        await asyncio.sleep(self.delays.get(url, self.latency))
        if url in self.failing:
            raise FetchError(f'Fetch failed for {url}')
        try:
            return self.metrics[url]
        except KeyError:
            raise FetchError(f'No metrics for {url}') from None
