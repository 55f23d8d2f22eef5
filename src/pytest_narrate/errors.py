"""Builder exception and warning hierarchy.

This module defines the errors raised by the scenario builder itself when
it is misused (for example, a scenario re-run under a strict policy).

Failures raised by registered steps never pass through these types:
they are propagated to the caller of `Scenario.run` exactly as raised.
"""

from os import linesep
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pytest_narrate.scenario import Scenario

FORMAT_INDENT = 4


class ScenarioWarning(UserWarning):
    """Base warning for non-fatal scenario misuse.

    Emitted instead of an error when the configured policy for
    a misuse is `warn`.
    """


class ScenarioRerunWarning(ScenarioWarning):
    """Warning emitted when an already executed scenario is run again."""


class ScenarioPendingWarning(ScenarioWarning):
    """Warning emitted when a scenario with steps was never run."""


class ScenarioError(Exception):
    """Base exception for all pytest-narrate errors.

    All exceptions raised by the builder itself inherit from this class
    to allow unified error handling by callers. Step failures are never
    converted into this type.
    """

    def __init__(self, message: str, *,
                 scenario: 'Scenario[Any] | None' = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            scenario: Optional scenario associated with the error.
        """
        self.message = message
        self.scenario = scenario

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.scenario)

    @staticmethod
    def format(message: str, scenario: 'Scenario[Any] | None' = None) -> str:
        """Format an error message with the scenario state.

        Args:
            message: Base human-readable error message.
            scenario: Optional scenario to describe.

        Returns:
            The message, followed by the number of registered steps and
            runs when a scenario is provided.
        """
        if scenario is None:
            return message

        indent = ' ' * FORMAT_INDENT

        return (
            f'{message}{linesep}'
            f'{indent}with {len(scenario)} step(s), '
            f'run {scenario.runs} time(s)'
        )


class ScenarioStateError(ScenarioError):
    """Error raised when a scenario is used in a forbidden state.

    This covers running an executed scenario again under the `forbid`
    re-run policy and leaving a scenario unrun under the `forbid`
    pending policy of the pytest plugin.
    """
