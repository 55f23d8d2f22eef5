"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from tests.examples.calculation import Calculation

if TYPE_CHECKING:
    from pytest_mock import MockerFixture, MockType


@pytest.fixture
def calculation() -> Calculation:
    """Provide a fresh calculation fixture."""
    return Calculation()


@pytest.fixture
def recorder(mocker: 'MockerFixture') -> 'MockType':
    """Provide a parent mock for step mocks.

    Steps taken as attributes of the recorder (`recorder.first`,
    `recorder.second`, ...) share its `mock_calls` list, which preserves
    the relative order of calls across all steps.
    """
    return mocker.Mock()
