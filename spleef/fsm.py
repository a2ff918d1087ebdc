from __future__ import annotations

import logging
from enum import StrEnum

from statemachine import State, StateMachine

logger = logging.getLogger(__name__)


class RoundPhase(StrEnum):
    waiting = "waiting"
    active = "active"
    ending = "ending"


class RoundFSM(StateMachine):
    """Phase bookkeeping for one spleef realm.

    - phases: waiting -> active -> ending -> waiting, or active -> waiting when
      everybody leaves mid-round.
    - roster changes are applied by the plugin; the FSM only guards transitions.
    """

    waiting = State(RoundPhase.waiting.value, value=RoundPhase.waiting.value, initial=True)
    active = State(RoundPhase.active.value, value=RoundPhase.active.value)
    ending = State(RoundPhase.ending.value, value=RoundPhase.ending.value)

    begin_round = waiting.to(active)
    declare_winner = active.to(ending)
    abort_round = active.to(waiting)
    finish_cooldown = ending.to(waiting)

    @property
    def phase(self) -> RoundPhase:
        return RoundPhase(str(self.current_state.value))

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info("Setting spleef state to %s (%s from %s)", target.value, event, source.value)
