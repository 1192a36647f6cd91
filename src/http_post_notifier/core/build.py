"""Build facts supplied by the host automation server.

The notifier never drives a build; it reads a finished build's name, number,
URL, result and variables. These are modelled as read-only values so the
build step can be called as a plain function.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class BuildResult(str, Enum):
    """Outcome of a build, ordered from best to worst.

    Attributes:
        SUCCESS: The build completed without errors.
        UNSTABLE: The build completed but tests or checks reported problems.
        FAILURE: The build failed.
        NOT_BUILT: The build was skipped.
        ABORTED: The build was interrupted.
    """

    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"

    @property
    def ordinal(self) -> int:
        """Severity rank; larger is worse."""
        return list(BuildResult).index(self)

    def is_worse_or_equal(self, other: BuildResult) -> bool:
        """Check whether this result is at least as bad as ``other``."""
        return self.ordinal >= other.ordinal

    def is_better_than(self, other: BuildResult) -> bool:
        """Check whether this result is strictly better than ``other``."""
        return self.ordinal < other.ordinal

    @classmethod
    def from_string(cls, value: str) -> BuildResult:
        """Convert a result name (case-insensitive) to a BuildResult.

        Raises:
            ValueError: If the name doesn't match any result.
        """
        normalized = value.strip().upper()
        for result in cls:
            if result.value == normalized:
                return result
        raise ValueError(f"Unknown build result: {value}")

    def __str__(self) -> str:
        return self.value


def _frozen_variables(variables: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(variables or {}))


@dataclass(frozen=True)
class BuildOutcome:
    """A finished build as seen by the notifier.

    Attributes:
        job_name: Name of the job the build belongs to.
        build_number: Sequential build number within the job.
        absolute_url: Absolute URL of the build page.
        result: The build result.
        variables: Build variables (e.g. ``phase``, ``scheme``, ``branch``,
            ``service``). Stored read-only.
    """

    job_name: str
    build_number: int
    absolute_url: str
    result: BuildResult = BuildResult.SUCCESS
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.result, str) and not isinstance(self.result, BuildResult):
            object.__setattr__(self, "result", BuildResult.from_string(self.result))
        object.__setattr__(self, "variables", _frozen_variables(self.variables))

    @property
    def failed(self) -> bool:
        """True when the result is FAILURE or worse."""
        return self.result.is_worse_or_equal(BuildResult.FAILURE)

    def variable(self, name: str, default: str = "") -> str:
        """Return a build variable, or ``default`` when it isn't set."""
        value = self.variables.get(name)
        return default if value is None else str(value)

    @property
    def display_name(self) -> str:
        """``job #number`` form used in messages."""
        return f"{self.job_name} #{self.build_number}"


__all__ = [
    "BuildOutcome",
    "BuildResult",
]
