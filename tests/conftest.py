"""
Shared fixtures for the structured comment tests.

Run with: pytest tests -v
"""

import shlex
import sys

import pytest

from scomment_core.config.settings import EngineConfig
from scomment_core.processor import SectionProcessor


@pytest.fixture
def python_command():
    """Build a converter command line that runs a Python snippet."""
    def build(script: str) -> str:
        return f"{shlex.quote(sys.executable)} -c {shlex.quote(script)}"
    return build


@pytest.fixture
def processor():
    """Processor without an external converter."""
    return SectionProcessor(EngineConfig())
