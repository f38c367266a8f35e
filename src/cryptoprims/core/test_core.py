#!/usr/bin/env python3
"""
Tests for the shared plumbing: errors, packing helpers, config, registry
and the benchmark runner.
"""

import logging

import pytest

from cryptoprims.core import (
    CryptoPrimitiveError,
    InvalidKeyLength,
    InvalidStateTransition,
    DEFAULT_CONFIG,
    load_config,
    register_implementation,
    get_implementation,
    list_implementations,
    register_all_implementations,
    run_benchmarks,
    calculate_aggregated_metrics,
    BenchmarkMetrics,
)
from cryptoprims.core.config import LOG_LEVEL_ENV_VAR, resolve_log_level
from cryptoprims.core.registry import PRIMITIVE_IMPLEMENTATIONS
from cryptoprims.core.benchmark_runner import generate_data
from cryptoprims.core.utils import (
    rotl32, rotr32, load_u32_le, load_u32_be, store_u32_le, store_u32_be,
    load_words_le, store_words_le, word_to_bytes_le, bytes_to_word_le,
)


def test_error_hierarchy():
    assert issubclass(InvalidKeyLength, CryptoPrimitiveError)
    assert issubclass(InvalidKeyLength, ValueError)
    assert issubclass(InvalidStateTransition, CryptoPrimitiveError)
    assert issubclass(InvalidStateTransition, RuntimeError)
    assert "17 bytes" in str(InvalidKeyLength(17))
    assert "update()" in str(InvalidStateTransition("update", "FINALIZED"))


def test_rotations():
    assert rotl32(0x80000000, 1) == 1
    assert rotr32(1, 1) == 0x80000000
    assert rotl32(0x12345678, 8) == 0x34567812
    assert rotr32(rotl32(0xDEADBEEF, 13), 13) == 0xDEADBEEF


def test_word_packing():
    data = bytes.fromhex("0102030405060708090a0b0c0d0e0f10")
    assert load_u32_le(data) == 0x04030201
    assert load_u32_be(data, 4) == 0x05060708
    assert store_u32_le(0x04030201) == data[:4]
    assert store_u32_be(0x05060708) == data[4:8]
    words = load_words_le(data)
    assert store_words_le(*words) == data
    assert word_to_bytes_le(0x04030201) == (1, 2, 3, 4)
    assert bytes_to_word_le(1, 2, 3, 4) == 0x04030201


def test_store_words_into_buffer():
    out = bytearray(16)
    assert store_words_le(1, 2, 3, 4, out) is out
    assert load_words_le(out) == (1, 2, 3, 4)


def test_load_config_defaults_untouched():
    config = load_config({"test_parameters": {"iterations": 7}})
    assert config["test_parameters"]["iterations"] == 7
    assert config["test_parameters"]["data_size_bytes"] == DEFAULT_CONFIG["test_parameters"]["data_size_bytes"]
    assert DEFAULT_CONFIG["test_parameters"]["iterations"] == 3


def test_load_config_normalizes():
    config = load_config({"test_parameters": {"implementations": "sha256"}, "logging": {"level": "debug"}})
    assert config["test_parameters"]["implementations"] == ["sha256"]
    assert config["logging"]["level"] == "DEBUG"
    load_config()


@pytest.mark.parametrize("overrides", [
    {"test_parameters": {"iterations": 0}},
    {"test_parameters": {"data_size_bytes": -1}},
    {"logging": {"level": "LOUD"}},
])
def test_load_config_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        load_config(overrides)


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "warning")
    assert resolve_log_level() == logging.WARNING
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "nonsense")
    assert resolve_log_level() == logging.INFO


def test_register_implementation_decorator():
    @register_implementation("dummy_primitive")
    class Dummy:
        pass

    try:
        assert get_implementation("dummy_primitive") is Dummy
        assert "dummy_primitive" in list_implementations()
    finally:
        PRIMITIVE_IMPLEMENTATIONS.pop("dummy_primitive", None)


def test_register_all_implementations():
    implementations = register_all_implementations()
    for name in ("twofish", "twofish128", "twofish192", "twofish256",
                 "sha256", "sha256_custom", "sha256_pycryptodome", "sha256_cryptography", "sha256_hashlib"):
        assert name in implementations
    assert get_implementation("twofish128")().key_size == 128
    assert get_implementation("missing") is None


def test_generate_data_is_deterministic():
    assert generate_data(32, 5) == generate_data(32, 5)
    assert generate_data(32, 5) != generate_data(32, 6)
    assert len(generate_data(0, 1)) == 0


def test_metrics_measure():
    metrics = BenchmarkMetrics()
    assert metrics.measure("operation", sum, [1, 2, 3]) == 6
    assert metrics.operation_time_ns >= 0
    assert metrics.to_dict()["correctness_passed"] is True


def test_calculate_aggregated_metrics_empty():
    assert calculate_aggregated_metrics([]) == {}


def test_run_benchmarks_small():
    config = {
        "test_parameters": {
            "iterations": 2,
            "data_size_bytes": 100,
            "implementations": ["twofish128", "twofish256", "sha256", "sha256_hashlib", "not_a_primitive"],
        },
    }
    results = run_benchmarks(config)
    assert set(results) == {"twofish128", "twofish256", "sha256", "sha256_hashlib"}
    for name, result in results.items():
        aggregated = result["aggregated"]
        assert aggregated["iterations_completed"] == 2
        assert aggregated["all_correctness_checks_passed"], name
    # 100 bytes leaves six whole cipher blocks
    assert results["twofish128"]["iterations"][0]["input_size_bytes"] == 96
    assert results["sha256"]["iterations"][0]["input_size_bytes"] == 100
