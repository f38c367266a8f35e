import hashlib
import logging

import numpy as np

from .config import load_config
from .errors import CryptoPrimitiveError
from .metrics import BenchmarkMetrics
from .registry import register_all_implementations

logger = logging.getLogger("CryptoPrims")


def generate_data(size, seed):
    # deterministic pseudo-random bytes so runs are comparable
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()


def _run_cipher_iteration(implementation, data, key, metrics, check_correctness):
    # every block is encrypted independently; this is a timing loop, not a mode
    block_size = implementation.block_size_bytes
    usable = len(data) - len(data) % block_size
    blocks = [data[i:i + block_size] for i in range(0, usable, block_size)]
    metrics.input_size_bytes = usable

    schedule = metrics.measure("setup", implementation.prepare_key, key)
    ciphertext = metrics.measure(
        "operation", lambda: [implementation.encrypt_block(block, schedule) for block in blocks]
    )
    recovered = metrics.measure(
        "inverse", lambda: [implementation.decrypt_block(block, schedule) for block in ciphertext]
    )

    if check_correctness:
        metrics.correctness_passed = recovered == blocks


def _run_hash_iteration(implementation, data, metrics, check_correctness):
    metrics.input_size_bytes = len(data)
    digest = metrics.measure("operation", implementation.hash, data)

    if check_correctness:
        metrics.correctness_passed = digest == hashlib.sha256(data).digest()


def calculate_aggregated_metrics(iterations_data):
    # calculate aggregated metrics from iteration data
    if not iterations_data:
        return {}

    operation_ns = np.array([data["operation_time_ns"] for data in iterations_data], dtype=np.float64)
    setup_ns = np.array([data["setup_time_ns"] for data in iterations_data], dtype=np.float64)
    inverse_ns = np.array([data["inverse_time_ns"] for data in iterations_data], dtype=np.float64)
    input_size = iterations_data[0]["input_size_bytes"]

    avg_operation_s = operation_ns.mean() / 1_000_000_000
    throughput_mb_per_s = (input_size / (1024 * 1024)) / avg_operation_s if avg_operation_s > 0 else 0.0

    return {
        "iterations_completed": len(iterations_data),
        "all_correctness_checks_passed": all(data["correctness_passed"] for data in iterations_data),
        "avg_setup_time_ns": float(setup_ns.mean()),
        "avg_operation_time_ns": float(operation_ns.mean()),
        "median_operation_time_ns": float(np.median(operation_ns)),
        "std_operation_time_ns": float(operation_ns.std()),
        "avg_inverse_time_ns": float(inverse_ns.mean()),
        "avg_peak_memory_bytes": float(np.mean([data["peak_memory_bytes"] for data in iterations_data])),
        "throughput_mb_per_s": float(throughput_mb_per_s),
    }


def run_benchmarks(config=None, implementations=None):
    """
    Time the configured implementations over generated data.

    Args:
        config: Overrides for DEFAULT_CONFIG (see core.config)
        implementations: Name -> factory mapping; defaults to everything registered

    Returns:
        dict: Per implementation name, the raw iteration metrics and their aggregate
    """
    config = load_config(config)
    params = config["test_parameters"]
    iterations = int(params["iterations"])
    data_size = int(params["data_size_bytes"])
    seed = int(params["seed"])
    check_correctness = bool(params["check_correctness"])

    if implementations is None:
        implementations = register_all_implementations()

    logger.info(f"Starting benchmarks: {iterations} iterations over {data_size} bytes")
    results = {}

    for name in params["implementations"]:
        factory = implementations.get(name)
        if factory is None:
            logger.warning(f"Unknown implementation '{name}', skipping")
            continue

        implementation = factory()
        iterations_data = []

        for iteration in range(iterations):
            metrics = BenchmarkMetrics()
            metrics.set_algorithm_metadata(implementation)
            data = generate_data(data_size, seed + iteration)

            try:
                if implementation.kind == "block_cipher":
                    key = generate_data(implementation.key_size // 8, seed + 10_000 + iteration)
                    _run_cipher_iteration(implementation, data, key, metrics, check_correctness)
                else:
                    _run_hash_iteration(implementation, data, metrics, check_correctness)
            except (CryptoPrimitiveError, ValueError, TypeError) as e:
                logger.error(f"Error in {name} iteration {iteration}: {str(e)}")
                metrics.correctness_passed = False

            if not metrics.correctness_passed:
                logger.warning(f"Correctness check failed for {name} iteration {iteration}")
            iterations_data.append(metrics.to_dict())

        aggregated = calculate_aggregated_metrics(iterations_data)
        logger.info(
            f"{implementation.description}: {aggregated['avg_operation_time_ns'] / 1_000_000:.2f} ms avg, "
            f"{aggregated['throughput_mb_per_s']:.3f} MB/s"
        )
        results[name] = {
            "description": implementation.description,
            "iterations": iterations_data,
            "aggregated": aggregated,
        }

    logger.info(f"Benchmarks complete for {len(results)} implementations")
    return results
