"""Shared fixtures for cssvalues tests."""

from pathlib import Path

import pytest

from cssvalues.plugins import ValuesReplacePlugin
from cssvalues.processor import Processor


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def source_path() -> Path:
    """Pretend location of the processed stylesheet, next to the fixtures."""
    return FIXTURES_DIR / "from.css"


@pytest.fixture
def run(source_path):
    """Process CSS with the values plugin and return the result."""

    def _run(css, plugins_before=(), **options):
        processor = Processor([*plugins_before, ValuesReplacePlugin(**options)])
        return processor.process_sync(css, source=source_path)

    return _run
