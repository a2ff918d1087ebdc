from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from spleef.config import SpleefConfig
from spleef.core.arena import ArenaBuilder
from spleef.core.events import EventHandlingResult
from spleef.core.host import Participant, Realm, Server
from spleef.core.roster import Roster
from spleef.fsm import RoundFSM, RoundPhase
from spleef.scheduling import LoopScheduler, Scheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoundSnapshot:
    phase: RoundPhase
    start_pending: bool
    waiting: tuple[str, ...]
    active: tuple[str, ...]


class SpleefPlugin:
    """Runs spleef rounds in a dedicated realm.

    Players who join the realm queue up; once enough are waiting the floor is
    regrown, everyone is dropped onto it, and after a grace period the round
    goes live. Each tick, anyone who fell through the floor is out. The last
    player standing wins and, after a cooldown, the realm waits for the next
    round.

    All roster and phase mutation happens under one lock, whether it comes
    from a join/leave event, a tick, or a delayed timer.
    """

    name = "Spleef"

    def __init__(
        self,
        server: Server,
        *,
        config: SpleefConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.server = server
        self.config = config or SpleefConfig()
        self._scheduler = scheduler or LoopScheduler()
        self._rng = rng or random.Random()

        self._lock = threading.RLock()
        self._roster = Roster()
        self._fsm = RoundFSM()
        # Phase stays `waiting` through the grace period; this stops a second start.
        self._start_pending = False

        self.realm: Realm = server.get_or_create_realm(self.config.realm_name)
        self.realm.on_player_joined.subscribe(self.on_player_joined_realm)
        self.realm.on_player_left.subscribe(self.on_player_left_realm)
        server.on_server_tick.subscribe(self.on_spleef_tick)

        self.arena = ArenaBuilder(self.realm, self.config)
        self.arena.build_world()

    @property
    def phase(self) -> RoundPhase:
        return self._fsm.phase

    @property
    def waiting(self) -> tuple[Participant, ...]:
        return self._roster.waiting

    @property
    def active(self) -> tuple[Participant, ...]:
        return self._roster.active

    def snapshot(self) -> RoundSnapshot:
        with self._lock:
            return RoundSnapshot(
                phase=self.phase,
                start_pending=self._start_pending,
                waiting=tuple(p.name for p in self._roster.waiting),
                active=tuple(p.name for p in self._roster.active),
            )

    # -- host events -------------------------------------------------------

    def on_player_joined_realm(self, player: Participant) -> EventHandlingResult:
        logger.info("%s joined the spleef realm!", player.name)
        with self._lock:
            self._roster.add_waiting(player)

            if self.phase is RoundPhase.waiting:
                self._broadcast(f"{len(self._roster.waiting)}/{self.config.min_players} players needed to start...")
                self._check_if_enough_players()

        return EventHandlingResult.continue_

    def on_player_left_realm(self, player: Participant) -> EventHandlingResult:
        logger.info("%s left the spleef realm!", player.name)
        with self._lock:
            self._roster.remove_everywhere(player)
        return EventHandlingResult.continue_

    def on_spleef_tick(self, delta: float) -> EventHandlingResult:
        with self._lock:
            phase = self.phase
            if phase is RoundPhase.active:
                self._tick_active()
            elif phase is RoundPhase.waiting:
                self._check_if_enough_players()

        return EventHandlingResult.continue_

    # -- round flow ----------------------------------------------------------

    def _check_if_enough_players(self) -> None:
        if self._start_pending or len(self._roster.waiting) < self.config.min_players:
            return

        self.arena.rebuild_floor()
        self._broadcast("Starting spleef!!")
        players = self._roster.promote_all_waiting_to_active()
        # The start is committed before any teleport; a teleport failure only affects that player.
        self._start_pending = True
        self._schedule(self.config.grace_period_seconds, self._finish_grace_period)
        logger.info("Spleef round with %d players starts in %ss", len(players), self.config.grace_period_seconds)

        for player in players:
            try:
                player.teleport(self.arena.random_spawn_point(self._rng))
            except Exception:
                logger.exception("Failed to teleport %s into the spleef arena", player.name)

    def _tick_active(self) -> None:
        if self._settle_round():
            return

        threshold = self.config.fall_threshold
        for player in self._roster.active:
            if player.position.y < threshold:
                self._broadcast(f"{player.name} fell!")
                self._roster.stage_for_removal(player)

        if self._roster.flush_removals():
            self._settle_round()

    def _settle_round(self) -> bool:
        """End the round if at most one player is left. Returns True if it ended."""

        active = self._roster.active
        if len(active) == 1:
            self._broadcast(f"{active[0].name} won!")
            self._fsm.declare_winner()
            self._roster.demote_all_active_to_waiting()
            self._schedule(self.config.cooldown_seconds, self._finish_cooldown)
            return True

        if not active:
            # No winner and no cooldown; straight back to waiting.
            self._fsm.abort_round()
            return True

        return False

    def _finish_grace_period(self) -> None:
        self._start_pending = False
        self._fsm.begin_round()

    def _finish_cooldown(self) -> None:
        self._fsm.finish_cooldown()

    # -- plumbing --------------------------------------------------------------

    def _schedule(self, delay: float, transition: Callable[[], None]) -> None:
        self._scheduler.call_later(delay, partial(self._deliver, transition))

    def _deliver(self, transition: Callable[[], None]) -> None:
        with self._lock:
            try:
                transition()
            except Exception:
                logger.exception("Delayed spleef transition %s failed", getattr(transition, "__name__", transition))

    def _broadcast(self, text: str) -> None:
        self.server.chat.send_server_message_to(self.realm, text)
