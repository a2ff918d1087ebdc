from __future__ import annotations

from spleef.core.host import Participant


class Roster:
    """Tracks who is waiting for the next round and who is playing.

    Every operation is a no-op for participants it doesn't know about; join and
    leave events can arrive in any phase, so absence is never an error.

    Invariant: no participant is in both `waiting` and `active`.
    """

    def __init__(self) -> None:
        self._waiting: list[Participant] = []
        self._active: list[Participant] = []
        self._staged: list[Participant] = []

    @property
    def waiting(self) -> tuple[Participant, ...]:
        return tuple(self._waiting)

    @property
    def active(self) -> tuple[Participant, ...]:
        return tuple(self._active)

    @property
    def staged(self) -> tuple[Participant, ...]:
        return tuple(self._staged)

    def add_waiting(self, p: Participant) -> bool:
        """Queue `p` for the next round. Returns False if it's already tracked."""

        if p in self._waiting or p in self._active:
            return False
        self._waiting.append(p)
        return True

    def remove_everywhere(self, p: Participant) -> None:
        for bucket in (self._waiting, self._active, self._staged):
            if p in bucket:
                bucket.remove(p)

    def promote_all_waiting_to_active(self) -> list[Participant]:
        promoted = list(self._waiting)
        self._active.extend(promoted)
        self._waiting.clear()
        return promoted

    def demote_all_active_to_waiting(self) -> list[Participant]:
        demoted = list(self._active)
        self._waiting.extend(demoted)
        self._active.clear()
        return demoted

    def stage_for_removal(self, p: Participant) -> None:
        if p in self._active and p not in self._staged:
            self._staged.append(p)

    def flush_removals(self) -> list[Participant]:
        """Move every staged participant from active to waiting, in staging order."""

        flushed: list[Participant] = []
        for p in self._staged:
            if p not in self._active:
                continue
            self._active.remove(p)
            self._waiting.append(p)
            flushed.append(p)
        self._staged.clear()
        return flushed
