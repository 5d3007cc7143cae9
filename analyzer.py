import asyncio
import logging
import re
from typing import Optional

from errors import InvalidInput, MetricsUnavailable
from estimator import EstimateParams, MODELS
from grader import classify
from provider import MetricsProvider
from schemas import AnalysisResult, Metrics, ModelEstimate

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r'^(http|https)://[^ "]+$')


def validate_url(url: str) -> str:
    """Reject empty or malformed URLs before any work starts."""
    if not url:
        raise InvalidInput('Please enter a website URL to analyze.')
    if not URL_PATTERN.match(url) or any(c.isspace() for c in url):
        raise InvalidInput('Please enter a valid URL, starting with http:// or https://')
    return url


def build_result(url: str, metrics: Metrics, params: Optional[EstimateParams] = None) -> AnalysisResult:
    """Run every registered model over the metrics and grade each estimate."""
    estimates = {}
    for model_id, model in MODELS.items():
        grams = model(metrics.byte_size, metrics.is_green_hosting, params)
        grade = classify(grams)
        logger.debug('%s: %s -> %.4f g (%s)', url, model_id, grams, grade)
        estimates[model_id] = ModelEstimate(model_name=model_id, grams=grams, grade=grade)
    return AnalysisResult(subject_url=url, metrics=metrics, estimates=estimates)


class SiteAnalyzer:
    def __init__(self, provider: MetricsProvider, timeout: Optional[float] = None,
                 params: Optional[EstimateParams] = None):
        self.provider = provider
        self.timeout = timeout
        self.params = params

    async def analyze(self, url: str, validate: bool = True) -> AnalysisResult:
        """
        Fetch metrics for url and estimate its emissions under every model.

        Catalog URLs are trusted configuration and skip validation with
        validate=False. Provider failures and timeouts surface as
        MetricsUnavailable; there is no retry and no partial result.
        """
        if validate:
            validate_url(url)
        elif not url:
            raise InvalidInput('url must be non-empty')
        logger.info('Analyzing %s', url)
        try:
            metrics = await asyncio.wait_for(self.provider.fetch_metrics(url), self.timeout)
        except asyncio.TimeoutError:
            raise MetricsUnavailable(url, f'timed out after {self.timeout}s') from None
        except Exception as e:
            raise MetricsUnavailable(url, str(e) or type(e).__name__) from e
        result = build_result(url, metrics, self.params)
        logger.info('Analysis complete for %s: %d bytes, green=%s', url, metrics.byte_size,
                    metrics.is_green_hosting)
        return result
