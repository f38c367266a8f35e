import logging

from .config import resolve_log_level

# configure logging
logger = logging.getLogger("CryptoPrims")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(resolve_log_level())

# import components
from .errors import CryptoPrimitiveError, InvalidKeyLength, InvalidStateTransition
from .config import DEFAULT_CONFIG, load_config
from .registry import register_implementation, get_implementation, list_implementations, register_all_implementations
from .metrics import BenchmarkMetrics
from .benchmark_runner import run_benchmarks, calculate_aggregated_metrics

__all__ = [
    'CryptoPrimitiveError',
    'InvalidKeyLength',
    'InvalidStateTransition',
    'DEFAULT_CONFIG',
    'load_config',
    'register_implementation',
    'get_implementation',
    'list_implementations',
    'register_all_implementations',
    'BenchmarkMetrics',
    'run_benchmarks',
    'calculate_aggregated_metrics',
]
