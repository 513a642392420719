"""Shared pytest fixtures."""

import logging
from pathlib import Path

import pytest

from makefmt.config import FormatterConfig

TESTDATA_DIR = Path(__file__).parent / "testdata"


@pytest.fixture
def isolated_root_logger(monkeypatch):
    """Point logging.getLogger() at a throwaway root logger for the test."""
    root = logging.RootLogger(logging.WARNING)
    monkeypatch.setattr(logging, "root", root)
    return root


@pytest.fixture(autouse=True)
def clean_makefmt_env(monkeypatch):
    """Keep MAKEFMT_* variables from the developer's shell out of tests."""
    monkeypatch.delenv("MAKEFMT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MAKEFMT_CONFIG_PATH", raising=False)


@pytest.fixture
def config() -> FormatterConfig:
    """Formatter options at their defaults."""
    return FormatterConfig()


@pytest.fixture
def testdata_dir() -> Path:
    return TESTDATA_DIR
