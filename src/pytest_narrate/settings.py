"""Runtime settings for scenarios created by the pytest plugin.

Settings are resolved from environment variables (prefixed with
`NARRATE_`) and may be overridden by pytest command-line options.
Scenarios constructed directly never consult these settings.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Reaction to a misuse of a scenario.
#: `allow` ignores it, `warn` emits a `ScenarioWarning`,
#: `forbid` raises a `ScenarioStateError`.
type Policy = Literal['allow', 'warn', 'forbid']

POLICIES: tuple[Policy, ...] = ('allow', 'warn', 'forbid')


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored,
          so unrelated variables in the environment never break resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )


class ScenarioSettings(SettingsModel):
    """Policies applied to scenarios built through the `scenario` fixture."""

    model_config = SettingsConfigDict(env_prefix='NARRATE_')

    rerun: Policy = Field(
        default='allow',
        title='Re-run policy',
        description=(
            'What happens when `run` is called on a scenario that has '
            'already been run. By default all steps are executed again '
            'against the already mutated fixture.'
        ),
    )

    pending: Policy = Field(
        default='warn',
        title='Pending scenario policy',
        description=(
            'What happens at fixture teardown with scenarios that have '
            'registered steps but were never run.'
        ),
    )
