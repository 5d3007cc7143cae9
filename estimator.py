# Emissions models: pure functions of (bytes, green hosting, params) -> grams CO2.
# https://sustainablewebdesign.org/estimating-digital-emissions/

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from errors import InvalidInput, UnknownModel

BYTES_PER_MB = 2 ** 20
BITS_PER_KILOBIT = 1024

# grams CO2 per megabyte
ONE_BYTE_GREEN_RATE    = 1.8
ONE_BYTE_STANDARD_RATE = 4.6

# grams CO2 per kilobit
SWD_GREEN_RATE    = 0.0015
SWD_STANDARD_RATE = 0.0035


@dataclass(frozen=True)
class EstimateParams:
    """Optional adjustments; the defaults leave every model's base formula untouched."""
    grid_factor: float = 1.0
    first_visit_share: float = 1.0
    data_reload_ratio: float = 0.0

    def __post_init__(self):
        if self.grid_factor < 0:
            raise InvalidInput('grid_factor must be non-negative')
        if not 0.0 <= self.first_visit_share <= 1.0:
            raise InvalidInput('first_visit_share must be within [0, 1]')
        if not 0.0 <= self.data_reload_ratio <= 1.0:
            raise InvalidInput('data_reload_ratio must be within [0, 1]')

    def transferred_bytes(self, byte_size: float) -> float:
        # Returning visitors only reload data_reload_ratio of the page
        if self.first_visit_share == 1.0:
            return byte_size
        returning = 1.0 - self.first_visit_share
        return byte_size * (self.first_visit_share + returning * self.data_reload_ratio)


ModelFn = Callable[[float, bool, Optional[EstimateParams]], float]

MODELS: Dict[str, ModelFn] = {}
MODEL_LABELS: Dict[str, str] = {}


def register_model(model_id: str, label: str) -> Callable[[ModelFn], ModelFn]:
    """Register an emissions model under a stable identifier."""
    def decorator(fn: ModelFn) -> ModelFn:
        if model_id in MODELS:
            raise ValueError(f'Model already registered: {model_id}')
        MODELS[model_id] = fn
        MODEL_LABELS[model_id] = label
        return fn
    return decorator


def model_ids() -> List[str]:
    return list(MODELS)


def model_label(model_id: str) -> str:
    if model_id not in MODEL_LABELS:
        raise UnknownModel(model_id)
    return MODEL_LABELS[model_id]


def _check_bytes(byte_size: float) -> None:
    if byte_size < 0:
        raise InvalidInput(f'byte_size must be non-negative, got {byte_size}')


@register_model('oneByte', 'OneByte')
def one_byte(byte_size: float, is_green_hosting: bool, params: Optional[EstimateParams] = None) -> float:
    """Per-megabyte model."""
    _check_bytes(byte_size)
    params = params or EstimateParams()
    rate = ONE_BYTE_GREEN_RATE if is_green_hosting else ONE_BYTE_STANDARD_RATE
    return (params.transferred_bytes(byte_size) / BYTES_PER_MB) * rate * params.grid_factor


@register_model('swd', 'SWD')
def swd(byte_size: float, is_green_hosting: bool, params: Optional[EstimateParams] = None) -> float:
    """Per-kilobit model."""
    _check_bytes(byte_size)
    params = params or EstimateParams()
    rate = SWD_GREEN_RATE if is_green_hosting else SWD_STANDARD_RATE
    return (params.transferred_bytes(byte_size) * 8 / BITS_PER_KILOBIT) * rate * params.grid_factor


def estimate(model_id: str, byte_size: float, is_green_hosting: bool,
             params: Optional[EstimateParams] = None) -> float:
    """
    Estimate grams CO2 for serving byte_size bytes under the given model.
    """
    try:
        fn = MODELS[model_id]
    except KeyError:
        raise UnknownModel(model_id) from None
    return fn(byte_size, is_green_hosting, params)
