import os
from typing import Optional
from dotenv import load_dotenv

# Load environment from .env if present
load_dotenv()

DEFAULT_GEMINI_MODEL = 'gemini-2.5-flash'
DEFAULT_SIMULATED_LATENCY = 1.5
DEFAULT_GREEN_PROBABILITY = 0.4


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f'{name} must be a number, got {raw!r}')


def get_google_api_key() -> Optional[str]:
    return os.getenv('GOOGLE_API_KEY')


def get_gemini_model() -> str:
    return os.getenv('GEMINI_MODEL', DEFAULT_GEMINI_MODEL)


def get_metrics_timeout() -> Optional[float]:
    """Per-analysis timeout in seconds; unset means the provider call may take as long as it needs."""
    return _float_env('METRICS_TIMEOUT_SECONDS', None)


def get_simulated_latency() -> float:
    return _float_env('SIMULATED_LATENCY_SECONDS', DEFAULT_SIMULATED_LATENCY)


def get_green_probability() -> float:
    return _float_env('GREEN_HOSTING_PROBABILITY', DEFAULT_GREEN_PROBABILITY)


def get_log_level() -> str:
    return os.getenv('LOG_LEVEL', 'INFO').upper()
