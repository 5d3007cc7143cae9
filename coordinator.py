import asyncio
import enum
import logging
from typing import Dict, List, Optional, Sequence

from analyzer import SiteAnalyzer, validate_url
from catalog import CATALOG
from errors import AnalysisInProgress
from ranker import rank_all, rank_for
from schemas import AnalysisResult, CatalogEntry, RankedEntry

logger = logging.getLogger(__name__)


class RankingState(str, enum.Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    READY = 'ready'
    FAILED = 'failed'


class Coordinator:
    """
    Owns the mutable state: the current interactive result and the ranking map.

    Both slots are only ever replaced wholesale once a call has finished.
    """

    def __init__(self, analyzer: SiteAnalyzer, catalog: Sequence[CatalogEntry] = CATALOG):
        self.analyzer = analyzer
        self.catalog = tuple(catalog)
        self.current_result: Optional[AnalysisResult] = None
        self.results: Dict[str, AnalysisResult] = {}
        self.state = RankingState.IDLE
        self._analysis_in_flight = False
        self._generation = 0
        self._loaded = False

    @property
    def analysis_in_flight(self) -> bool:
        return self._analysis_in_flight

    async def analyze_url(self, url: str) -> AnalysisResult:
        validate_url(url)
        if self._analysis_in_flight:
            raise AnalysisInProgress('An analysis is already running; wait for it to finish.')
        self._analysis_in_flight = True
        try:
            # On failure the previous result stays in place
            result = await self.analyzer.analyze(url)
        finally:
            self._analysis_in_flight = False
        self.current_result = result
        return result

    def _log_dropped(self, entry: CatalogEntry, error: BaseException) -> None:
        logger.warning('Failed to analyze %s (%s): %s', entry.name, entry.url, error)

    async def refresh_rankings(self) -> Dict[str, AnalysisResult]:
        """
        Rank the catalog and swap in the new map once every entry has settled.

        Overlapping refreshes are allowed, but only the most recently started
        one may replace the map or move the state; older runs are discarded.
        """
        self._generation += 1
        generation = self._generation
        logger.info('Ranking %d catalog sites (refresh %d)', len(self.catalog), generation)
        self.state = RankingState.LOADING
        try:
            results = await rank_all(self.catalog, self.analyzer, on_error=self._log_dropped)
        except asyncio.CancelledError:
            if generation == self._generation:
                self.state = RankingState.READY if self._loaded else RankingState.IDLE
            raise
        except Exception:
            logger.exception('Catalog ranking could not run')
            if generation == self._generation:
                self.state = RankingState.FAILED
            raise
        if generation != self._generation:
            logger.info('Discarding refresh %d, superseded by refresh %d', generation, self._generation)
            return results
        self.results = results
        self._loaded = True
        self.state = RankingState.READY
        logger.info('Ranking ready: %d of %d sites analyzed', len(results), len(self.catalog))
        return results

    def rankings(self, model_id: str, category: Optional[str] = None) -> List[RankedEntry]:
        return rank_for(model_id, self.results, self.catalog, category=category)
