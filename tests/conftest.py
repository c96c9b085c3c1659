"""Test fixtures for volumeset tests."""

from __future__ import annotations

import pytest
import structlog
from structlog.stdlib import BoundLogger

from volumeset.constants import ROOT_LOGGER
from volumeset.services.builder.volumes import VolumeSetBuilder


@pytest.fixture
def logger() -> BoundLogger:
    return structlog.get_logger(ROOT_LOGGER)


@pytest.fixture
def builder(logger: BoundLogger) -> VolumeSetBuilder:
    """Construct a builder for the default service."""
    return VolumeSetBuilder(logger=logger)
