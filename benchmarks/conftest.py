"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def fragments() -> list[str]:
    """Mixed-size fragments typical of assembled output."""
    return [f"<td>{i}</td>" if i % 7 else f"<tr id='row-{i}'>\n" for i in range(10_000)]


@pytest.fixture
def large_text() -> str:
    """~100KB of text with regular replace targets."""
    return "the cat sat on the mat. " * 4000
