"""Pytest plugin exposing scenarios as a fixture.

This module integrates `pytest-narrate` with pytest by:
- registering command-line options for scenario policies;
- resolving `ScenarioSettings` once per session;
- providing the `scenario` fixture, a factory of configured scenarios
  that reports scenarios left unrun at teardown.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any
from warnings import warn

import pytest
from pydantic import ValidationError

from pytest_narrate.errors import ScenarioPendingWarning, ScenarioStateError
from pytest_narrate.scenario import Scenario
from pytest_narrate.settings import POLICIES, ScenarioSettings

if TYPE_CHECKING:
    from collections.abc import Generator

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.fixtures import FixtureRequest
    from _pytest.reports import TestReport
    from _pytest.runner import CallInfo

#: Factory returned by the `scenario` fixture.
type ScenarioFactory = Callable[[Any], Scenario[Any]]

#: Whether the call phase of a test item ended other than passed
#: (failed, skipped or xfailed).
CALL_INCOMPLETE = pytest.StashKey[bool]()


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-narrate.

    Args:
        parser: Pytest argument parser.
    """
    group = parser.getgroup('narrate', 'scenario policies')
    group.addoption(
        '--narrate-rerun',
        action='store',
        dest='narrate_rerun',
        choices=POLICIES,
        default=None,
        help=(
            'What to do when an already executed scenario is run again: '
            'allow it, warn about it or forbid it. '
            'Overrides the NARRATE_RERUN environment variable.'
        ),
    )
    group.addoption(
        '--narrate-pending',
        action='store',
        dest='narrate_pending',
        choices=POLICIES,
        default=None,
        help=(
            'What to do at teardown with scenarios that have steps '
            'but were never run: allow it, warn about it or forbid it. '
            'Overrides the NARRATE_PENDING environment variable.'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Resolve scenario settings for the session.

    Settings are read from the environment, then overridden by any
    command-line options given, and attached to the configuration
    object as `config.narrate_settings`.

    Args:
        config: Pytest configuration object.

    Raises:
        UsageError: If the environment holds an invalid policy.
    """
    overrides = {
        name: value
        for name in ('rerun', 'pending')
        if (value := config.getoption(f'narrate_{name}', default=None)) is not None
    }

    try:
        settings = ScenarioSettings(**overrides)
    except ValidationError as error:
        raise pytest.UsageError(f'Invalid pytest-narrate settings: {error}') from error

    config.narrate_settings = settings  # type: ignore[attr-defined]


@pytest.hookimpl(wrapper=True, tryfirst=True)
def pytest_runtest_makereport(
    item: pytest.Item,
    call: 'CallInfo[None]',  # noqa: ARG001
) -> 'Generator[None, TestReport, TestReport]':
    """Remember whether the test body did not pass.

    Scenarios are not reported as pending when the test failed, was
    skipped or xfailed, since that usually prevented the call to `run`.
    """
    report = yield
    if report.when == 'call':
        item.stash[CALL_INCOMPLETE] = not report.passed

    return report


@pytest.fixture
def scenario(request: 'FixtureRequest') -> 'Generator[ScenarioFactory, None, None]':
    """Provide a factory of scenarios configured for the session.

    Usage:

        def test_double(scenario):
            scenario(Fixture()).given(a_is(5)).when(doubled()).then(result_is(10)).run()

    At teardown, scenarios created by the factory that have steps but
    were never run are reported according to the pending policy.

    Yields:
        A callable building a `Scenario` around the given fixture.
    """
    settings: ScenarioSettings = request.config.narrate_settings  # type: ignore[attr-defined]
    created: list[Scenario[Any]] = []

    def factory[T](fixture: T) -> Scenario[T]:
        item = Scenario(fixture, rerun=settings.rerun)
        created.append(item)
        return item

    yield factory

    if request.node.stash.get(CALL_INCOMPLETE, False):
        return

    pending = sum(1 for item in created if len(item) and not item.executed)
    if not pending or settings.pending == 'allow':
        return

    message = f'{pending} scenario(s) with steps were never run'
    if settings.pending == 'forbid':
        raise ScenarioStateError(message)

    warn(message, category=ScenarioPendingWarning, stacklevel=2)
