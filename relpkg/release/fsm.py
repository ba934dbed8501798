from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from relpkg.core.result import Err, Ok, Result
from relpkg.release.errors import ReleaseError

S = TypeVar("S")

FinishStatus = Literal["completed", "cancelled"]


@dataclass(frozen=True, slots=True)
class StepAdvance(Generic[S]):
    session: S


@dataclass(frozen=True, slots=True)
class StepFinish:
    status: FinishStatus = "completed"


@dataclass(frozen=True, slots=True)
class Finished(Generic[S]):
    session: S
    status: FinishStatus


StepOutcome = StepAdvance[S] | StepFinish
StepHandler = Callable[[S], Result[StepOutcome[S], ReleaseError]]
GetStep = Callable[[S], str]


FINISH = StepFinish()
CANCEL = StepFinish(status="cancelled")


def advance(session: S) -> StepAdvance[S]:
    return StepAdvance(session=session)


def run_state_machine(
    *,
    initial_state: S,
    get_step: GetStep[S],
    handlers: Mapping[str, StepHandler[S]],
) -> Result[Finished[S], ReleaseError]:
    """Drive ``handlers`` from ``initial_state`` until one finishes or fails.

    The session handed to the finishing handler is returned alongside the
    finish status.
    """
    current = initial_state

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            return Err(
                ReleaseError(
                    kind="invalid_step",
                    message=f"unknown release step: {step}",
                )
            )

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        if isinstance(outcome.value, StepFinish):
            return Ok(Finished(session=current, status=outcome.value.status))

        current = outcome.value.session
