"""Shared test fixtures."""

from __future__ import annotations

import pytest

from utf8codec import Utf8


@pytest.fixture
def codec() -> Utf8:
    return Utf8()


@pytest.fixture
def strict_codec() -> Utf8:
    return Utf8(errors="strict")
