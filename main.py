import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from advisor import build_eco_tip_prompt, generate_eco_tips
from analyzer import SiteAnalyzer
from catalog import categories, entries_for
from config import get_log_level, get_metrics_timeout
from coordinator import Coordinator
from errors import AdvisoryUnavailable, AnalysisInProgress, InvalidInput, MetricsUnavailable, UnknownModel
from estimator import MODEL_LABELS, model_label
from formatting import format_bytes, format_emissions
from grader import grade_color, ranking_color
from provider import SimulatedMetricsProvider
from schemas import (
    AnalysisResult, AnalysisView, AnalyzeRequest, EcoTipRequest, EcoTipResponse, EstimateView,
    RankedEntry, RankingRow, RankingsResponse, RefreshResponse,
)

# Configure logging
logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)


def to_analysis_view(result: AnalysisResult) -> AnalysisView:
    return AnalysisView(
        url=result.subject_url,
        page_size=format_bytes(result.metrics.byte_size),
        total_bytes=result.metrics.byte_size,
        requests=result.metrics.request_count,
        load_time_ms=result.metrics.load_time_ms,
        is_green_hosting=result.metrics.is_green_hosting,
        estimates=[
            EstimateView(
                model=model_id, label=model_label(model_id), grams=est.grams,
                formatted=format_emissions(est.grams), grade=est.grade, grade_color=grade_color(est.grade),
            )
            for model_id, est in result.estimates.items()
        ],
    )


def to_ranking_row(ranked: RankedEntry, model_id: str) -> RankingRow:
    est = ranked.result.estimates[model_id]
    return RankingRow(
        position=ranked.position,
        name=ranked.entry.name,
        url=ranked.entry.url,
        category=ranked.entry.category,
        grams=est.grams,
        emissions=format_emissions(est.grams),
        grade=est.grade,
        page_size=format_bytes(ranked.result.metrics.byte_size),
        is_green_hosting=ranked.result.metrics.is_green_hosting,
        color=ranking_color(ranked.position),
    )


def _collect_startup_ranking(task: asyncio.Task) -> None:
    # Retrieve the exception so it is not reported as never retrieved
    if task.cancelled():
        logger.info('Startup ranking cancelled')
        return
    if task.exception() is not None:
        logger.warning('Startup ranking failed: %s', task.exception())


def create_app(coordinator: Optional[Coordinator] = None, load_rankings_on_startup: bool = True) -> FastAPI:
    if coordinator is None:
        analyzer = SiteAnalyzer(SimulatedMetricsProvider(), timeout=get_metrics_timeout())
        coordinator = Coordinator(analyzer)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        task = None
        if load_rankings_on_startup:
            task = asyncio.create_task(coordinator.refresh_rankings())
            task.add_done_callback(_collect_startup_ranking)
        yield
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    app = FastAPI(lifespan=lifespan)
    app.state.coordinator = coordinator
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/models")
    async def list_models():
        return [{"id": model_id, "label": label} for model_id, label in MODEL_LABELS.items()]

    @app.get("/api/catalog")
    async def list_catalog():
        return {
            category: [e.model_dump() for e in entries_for(category, coordinator.catalog)]
            for category in categories(coordinator.catalog)
        }

    @app.post("/api/analyze", response_model=AnalysisView)
    async def analyze(req: AnalyzeRequest):
        try:
            result = await coordinator.analyze_url(req.url)
        except InvalidInput as e:
            raise HTTPException(status_code=422, detail=str(e))
        except AnalysisInProgress as e:
            raise HTTPException(status_code=409, detail=str(e))
        except MetricsUnavailable as e:
            logger.warning('%s', e)
            raise HTTPException(status_code=502,
                                detail='Failed to analyze website. Please check the URL and try again.')
        return to_analysis_view(result)

    @app.get("/api/analysis/current", response_model=AnalysisView)
    async def current_analysis():
        if coordinator.current_result is None:
            raise HTTPException(status_code=404, detail='No website analyzed yet.')
        return to_analysis_view(coordinator.current_result)

    @app.post("/api/rankings/refresh", response_model=RefreshResponse)
    async def refresh_rankings():
        results = await coordinator.refresh_rankings()
        return RefreshResponse(state=coordinator.state.value, analyzed=len(results),
                               catalog_size=len(coordinator.catalog))

    @app.get("/api/rankings", response_model=RankingsResponse)
    async def rankings(model: str = 'oneByte', category: Optional[str] = None):
        try:
            ranked = coordinator.rankings(model, category=category)
        except UnknownModel as e:
            raise HTTPException(status_code=400, detail=str(e))
        return RankingsResponse(
            state=coordinator.state.value,
            model=model,
            rankings=[to_ranking_row(r, model) for r in ranked],
        )

    @app.post("/api/eco-tip", response_model=EcoTipResponse)
    async def eco_tip(req: EcoTipRequest):
        prompt = req.prompt
        if not prompt:
            if coordinator.current_result is None:
                raise HTTPException(status_code=404, detail='Analyze a website before asking for tips.')
            try:
                prompt = build_eco_tip_prompt(coordinator.current_result, req.model)
            except UnknownModel as e:
                raise HTTPException(status_code=400, detail=str(e))
        try:
            text = await generate_eco_tips(prompt)
        except AdvisoryUnavailable as e:
            raise HTTPException(status_code=502, detail=str(e))
        return EcoTipResponse(response=text)

    return app


app = create_app()
