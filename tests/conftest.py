"""
Pytest configuration and shared fixtures for the carbon ranking tests.
"""

import pytest

from analyzer import SiteAnalyzer
from provider import StaticMetricsProvider
from schemas import CatalogEntry, Metrics


def _make_metrics(byte_size: int, green: bool = True, requests: int = 40, load_ms: int = 1500) -> Metrics:
    return Metrics(byte_size=byte_size, request_count=requests, load_time_ms=load_ms,
                   is_green_hosting=green)


@pytest.fixture
def abc_catalog():
    """Three-entry catalog from the end-to-end ranking scenario."""
    return [
        CatalogEntry(name='Site A', url='a', category='SKIN'),
        CatalogEntry(name='Site B', url='b', category='SKIN'),
        CatalogEntry(name='Site C', url='c', category='HAIR'),
    ]


@pytest.fixture
def abc_provider():
    return StaticMetricsProvider({
        'a': _make_metrics(1_000_000),
        'b': _make_metrics(2_000_000),
        'c': _make_metrics(500_000),
    })


@pytest.fixture
def abc_analyzer(abc_provider):
    return SiteAnalyzer(abc_provider)


@pytest.fixture
def make_metrics():
    return _make_metrics
