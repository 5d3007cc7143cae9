class CarbonRankError(Exception):
    """Base class for errors raised by the estimation and ranking engine."""


class InvalidInput(CarbonRankError, ValueError):
    pass


class UnknownModel(CarbonRankError, KeyError):
    def __init__(self, model_id: str):
        super().__init__(model_id)
        self.model_id = model_id

    def __str__(self) -> str:
        return f"Unknown emissions model: {self.model_id!r}"


class MetricsUnavailable(CarbonRankError):
    def __init__(self, url: str, reason: str = 'metrics provider call failed'):
        super().__init__(f'Metrics unavailable for {url}: {reason}')
        self.url = url
        self.reason = reason


class AnalysisInProgress(CarbonRankError):
    """An interactive analysis is still running; new requests are refused, not queued."""


class AdvisoryUnavailable(CarbonRankError):
    pass


class FetchError(CarbonRankError):
    """Generic failure of a metrics fetch (network problem, timeout, unknown site)."""
