"""Shared fixtures for the llmkit test suite."""

import pytest
from loguru import logger

from llmkit.utils.settings import ConversionSettings


@pytest.fixture(autouse=True)
def reset_loguru():
    """CLI runs attach loguru sinks to captured streams; detach them after each test."""
    yield
    logger.remove()
    logger.disable("llmkit")


@pytest.fixture
def all_targets_settings():
    """Settings with every target enabled and no byte budget, independent of the environment."""
    return ConversionSettings()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove llmkit environment variables so settings fall back to defaults."""
    for name in ("LLMKIT_CONFIG_PATH", "LLMKIT_DISABLED_TARGETS", "LLMKIT_MAX_BYTES"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
