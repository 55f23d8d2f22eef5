"""Fluent builder for Gherkin-style test bodies.

A `Scenario` collects an ordered list of steps, each a callable receiving
a shared mutable fixture, and executes them lazily when `run` is called:

    Scenario(SolveFixture()) \\
        .given(input_numbers_are(50, 7, 4, 3, 2, 1)) \\
        .and_(target_number_is(378)) \\
        .when(solve()) \\
        .then(closest_solution_is(378)) \\
        .run()

The registration methods are interchangeable: they exist only so that the
test reads as a narrative. `and` is a reserved word, hence `and_`.

Scenarios are not thread-safe. A scenario and its fixture must be used
from one thread at a time, and steps must not keep a reference to the
fixture beyond their own call.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING
from warnings import warn

from pytest_narrate.errors import ScenarioRerunWarning, ScenarioStateError
from pytest_narrate.settings import POLICIES

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from pytest_narrate.settings import Policy

#: A single unit of test behavior. The return value is ignored,
#: any raised exception fails the scenario.
type Step[T] = Callable[[T], object]


class Scenario[T]:
    """Ordered sequence of steps sharing one fixture.

    Steps are stored at registration and executed by `run` in registration
    order. The first step that raises stops the run, and its exception
    reaches the caller of `run` unchanged. Fixture mutations made before
    the failure are kept.
    """

    def __init__(self, fixture: T, *, rerun: 'Policy' = 'allow') -> None:
        """Initialize an empty scenario.

        Args:
            fixture: Object passed by reference to every step.
            rerun: Reaction to `run` being called on an executed scenario.

        Raises:
            ValueError: If `rerun` is not a known policy.
        """
        if rerun not in POLICIES:
            raise ValueError(f'Unknown re-run policy {rerun!r}')

        self._fixture = fixture
        self._steps: list[Step[T]] = []
        self._runs = 0

        self._rerun = rerun

    def __len__(self) -> int:
        """Number of registered steps."""
        return len(self._steps)

    def __repr__(self) -> str:
        """Debug representation."""
        return f'<{type(self).__name__} steps={len(self)} runs={self._runs}>'

    @property
    def rerun(self) -> 'Policy':
        """Reaction to `run` being called on an executed scenario."""
        return self._rerun

    @property
    def fixture(self) -> T:
        """Fixture shared by all steps."""
        return self._fixture

    @property
    def steps(self) -> tuple[Step[T], ...]:
        """Snapshot of the registered steps, in registration order."""
        return tuple(self._steps)

    @property
    def runs(self) -> int:
        """Number of times `run` has been started."""
        return self._runs

    @property
    def executed(self) -> bool:
        """Whether `run` has been invoked at least once."""
        return self._runs > 0

    def given(self, step: Step[T]) -> 'Self':
        """Register a step establishing preconditions."""
        return self.add_step(step)

    def when(self, step: Step[T]) -> 'Self':
        """Register a step performing the action under test."""
        return self.add_step(step)

    def then(self, step: Step[T]) -> 'Self':
        """Register a step checking an outcome."""
        return self.add_step(step)

    def and_(self, step: Step[T]) -> 'Self':
        """Register a step continuing the previous clause."""
        return self.add_step(step)

    def but(self, step: Step[T]) -> 'Self':
        """Register a step contrasting the previous clause."""
        return self.add_step(step)

    def add_step(self, step: Step[T]) -> 'Self':
        """Append a step to the scenario.

        All narrative methods delegate here. Steps may be appended after
        the scenario was run; they take part in the next run.

        Args:
            step: Callable receiving the fixture.

        Returns:
            This scenario, for chaining.

        Raises:
            TypeError: If `step` is not callable.
        """
        if not callable(step):
            raise TypeError(f'Step must be callable, got {step!r}')

        self._steps.append(step)

        return self

    def run(self) -> None:
        """Execute all registered steps against the fixture.

        Running a scenario without steps does nothing.

        Raises:
            ScenarioStateError: If the scenario was already run and
                the re-run policy is `forbid`.
            Exception: Whatever the first failing step raised, as is.
        """
        if self._runs:
            self.check_rerun()

        self._runs += 1

        for step in self.steps:
            step(self._fixture)

    def check_rerun(self) -> None:
        """Apply the re-run policy to an executed scenario.

        Raises:
            ScenarioStateError: If the re-run policy is `forbid`.
        """
        if self._rerun == 'forbid':
            raise ScenarioStateError('Scenario has already been run', scenario=self)

        if self._rerun == 'warn':
            warn(
                ScenarioStateError.format('Scenario has already been run', self),
                category=ScenarioRerunWarning,
                stacklevel=3,
            )
