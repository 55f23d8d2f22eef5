"""Example fixture and step factories for scenario tests.

Each factory returns a step bound to its arguments, so that tests read
as a narrative: `.given(a_is(5)).when(doubled()).then(result_is(10))`.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pytest_narrate import Step


@dataclass
class Calculation:
    """Mutable fixture shared by the steps of a scenario."""

    a: int = 0
    result: int = 0


def a_is(value: int) -> 'Step[Calculation]':
    """Store the operand."""
    def step(fixture: Calculation) -> None:
        fixture.a = value
    return step


def doubled() -> 'Step[Calculation]':
    """Double the operand into the result."""
    def step(fixture: Calculation) -> None:
        fixture.result = fixture.a * 2
    return step


def result_is(expected: int) -> 'Step[Calculation]':
    """Check the result."""
    def step(fixture: Calculation) -> None:
        assert fixture.result == expected, f'result is {fixture.result}'
    return step
