import logging
from typing import Optional

from google import genai
from google.genai import types

from config import get_gemini_model, get_google_api_key
from errors import AdvisoryUnavailable, UnknownModel
from estimator import model_label
from formatting import format_bytes
from schemas import AnalysisResult

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are a web sustainability consultant. Your goal is to provide concise, actionable tips to improve a website's carbon footprint. Focus on practical advice for developers and designers. Respond with a short, friendly introduction followed by a bulleted list of tips.
A website was analyzed with the following metrics:
- Page size: {page_size}
- Requests: {requests}
- Load time: {load_time}ms
- {model_label} Grade: {grade}
- Green Hosting: {green}

Based on these metrics, what are 3-5 specific, actionable tips to reduce its carbon footprint? Focus on things like image optimization, code minification, and caching."""

_client: Optional[genai.Client] = None


def get_client() -> genai.Client:
    global _client
    if _client is None:
        _client = genai.Client(api_key=get_google_api_key())
    return _client


def build_eco_tip_prompt(result: AnalysisResult, model_id: str = 'oneByte') -> str:
    if model_id not in result.estimates:
        raise UnknownModel(model_id)
    return PROMPT_TEMPLATE.format(
        page_size=format_bytes(result.metrics.byte_size),
        requests=result.metrics.request_count,
        load_time=result.metrics.load_time_ms,
        model_label=model_label(model_id),
        grade=result.estimates[model_id].grade,
        green='Yes' if result.metrics.is_green_hosting else 'No',
    )


# Single Gemini call
async def generate_eco_tips(prompt: str, client: Optional[genai.Client] = None) -> str:
    client = client or get_client()
    try:
        resp = await client.aio.models.generate_content(
            model=get_gemini_model(),
            contents=prompt,
            config=types.GenerateContentConfig(temperature=0.7),
        )
    except Exception as e:
        logger.warning('Eco-tip generation failed: %s', e)
        raise AdvisoryUnavailable('Failed to get eco-tips. Please try again later.') from e
    text = resp.text
    logger.debug('Gemini response: %s', text)
    if not text:
        raise AdvisoryUnavailable('Could not generate tips. Please try again.')
    return text
