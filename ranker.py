import asyncio
from typing import Callable, Dict, List, Optional, Sequence

from errors import UnknownModel
from estimator import MODELS
from schemas import AnalysisResult, CatalogEntry, RankedEntry

ErrorHandler = Callable[[CatalogEntry, BaseException], None]


async def rank_all(catalog: Sequence[CatalogEntry], analyzer,
                   on_error: Optional[ErrorHandler] = None) -> Dict[str, AnalysisResult]:
    """
    Analyze every catalog entry concurrently and collect the successes by URL.

    Waits for every analysis to settle. A failed entry is left out of the map
    and reported to on_error; it never aborts the others.
    """
    if not catalog:
        return {}
    outcomes = await asyncio.gather(
        *(analyzer.analyze(entry.url, validate=False) for entry in catalog),
        return_exceptions=True,
    )
    results: Dict[str, AnalysisResult] = {}
    for entry, outcome in zip(catalog, outcomes):
        if isinstance(outcome, asyncio.CancelledError):
            raise outcome
        if isinstance(outcome, Exception):
            if on_error is not None:
                on_error(entry, outcome)
            continue
        results[entry.url] = outcome
    return results


def rank_for(model_id: str, results: Dict[str, AnalysisResult], catalog: Sequence[CatalogEntry],
             category: Optional[str] = None) -> List[RankedEntry]:
    """
    Order the analyzed catalog entries by the given model's grams, lowest first.

    Ties keep catalog declaration order. Positions start at 1 and are
    relative to the model (and category, when filtering).
    """
    if model_id not in MODELS:
        raise UnknownModel(model_id)
    present = [
        e for e in catalog
        if e.url in results and (category is None or e.category == category)
    ]
    # sorted() is stable, so equal grams fall back to catalog order
    ordered = sorted(present, key=lambda e: results[e.url].estimates[model_id].grams)
    return [
        RankedEntry(entry=e, result=results[e.url], position=i)
        for i, e in enumerate(ordered, start=1)
    ]
