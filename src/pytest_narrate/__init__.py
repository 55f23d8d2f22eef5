"""Gherkin-style test bodies for Python unit tests.

The `pytest_narrate` package lets a test be written as an ordered
narrative of steps sharing one mutable fixture:

    Scenario(Fixture()).given(...).when(...).then(...).run()

Key features:
- lazy execution: steps are stored on registration and run on `run`;
- fail-fast runs that surface the failing step's exception unchanged;
- a pytest `scenario` fixture with configurable re-run and pending policies.
"""

from .errors import (
    ScenarioError,
    ScenarioPendingWarning,
    ScenarioRerunWarning,
    ScenarioStateError,
    ScenarioWarning,
)
from .scenario import Scenario, Step
from .settings import Policy, ScenarioSettings

__all__ = (
    'Policy',
    'Scenario',
    'ScenarioError',
    'ScenarioPendingWarning',
    'ScenarioRerunWarning',
    'ScenarioSettings',
    'ScenarioStateError',
    'ScenarioWarning',
    'Step',
)
