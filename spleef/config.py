from __future__ import annotations

import os
from dataclasses import dataclass

# Round rules. Fixed for a build; tests construct SpleefConfig with shorter delays.
MIN_PLAYERS = 2
XZ_DIMENSIONS = 30
HEIGHT = 11
GRACE_PERIOD_SECONDS = 3.0
COOLDOWN_SECONDS = 10.0
REALM_NAME = "spleef"


@dataclass(frozen=True, slots=True)
class SpleefConfig:
    min_players: int = MIN_PLAYERS
    # Arena footprint in the xz plane.
    xz_dimensions: int = XZ_DIMENSIONS
    height: int = HEIGHT
    grace_period_seconds: float = GRACE_PERIOD_SECONDS
    cooldown_seconds: float = COOLDOWN_SECONDS
    realm_name: str = REALM_NAME

    @property
    def floor_y(self) -> int:
        return self.height - 2

    @property
    def fall_threshold(self) -> int:
        # Anyone below mid-height has dropped through the floor.
        return self.height // 2


@dataclass(frozen=True, slots=True)
class HostSettings:
    tick_rate: float = 20.0
    log_level: str = "INFO"


def host_settings_from_env() -> HostSettings:
    tick_rate = float(os.environ.get("SPLEEF_TICK_RATE", "20"))
    if tick_rate <= 0:
        raise ValueError("SPLEEF_TICK_RATE must be positive")
    return HostSettings(
        tick_rate=tick_rate,
        log_level=os.environ.get("SPLEEF_LOG_LEVEL", "INFO").upper(),
    )
