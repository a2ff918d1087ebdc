from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from spleef.api.deps import get_runtime
from spleef.api.models import MoveFrame, RealmStatus
from spleef.core.vectors import Vec3
from spleef.infra.local_host import LocalPlayer
from spleef.runtime import Runtime
from spleef.websocket_hub import hub

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/realm/{realm_name}/player/{player_name}")
async def realm_ws(
    websocket: WebSocket,
    realm_name: str,
    player_name: str,
    runtime: Runtime = Depends(get_runtime),
) -> None:
    realm = runtime.server.get_realm(realm_name)
    if realm is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    conn = await hub.connect(realm_name, websocket)
    pump = asyncio.create_task(conn.pump())
    player = LocalPlayer(name=player_name, sink=conn.push)

    try:
        realm.join(player)
        await hub.broadcast(realm_name, {"type": "presence", "players": realm.member_names()})

        while True:
            raw = await websocket.receive_text()
            try:
                frame = MoveFrame.model_validate_json(raw)
            except ValidationError:
                logger.warning("Ignoring malformed frame from %s: %.200s", player_name, raw)
                continue
            player.move_to(Vec3(frame.x, frame.y, frame.z))
    except WebSocketDisconnect:
        pass
    finally:
        # No-op if the join never happened.
        realm.leave(player)
        await hub.disconnect(realm_name, conn)
        pump.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await pump
        await hub.broadcast(realm_name, {"type": "presence", "players": realm.member_names()})


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/realm/{realm_name}", response_model=RealmStatus)
async def realm_status_route(realm_name: str, runtime: Runtime = Depends(get_runtime)) -> RealmStatus:
    plugin = runtime.plugin
    realm = runtime.server.get_realm(realm_name)
    if realm is None or realm is not plugin.realm:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Realm not found")

    return RealmStatus.from_snapshot(
        realm=realm_name,
        min_players=plugin.config.min_players,
        members=realm.member_names(),
        snapshot=plugin.snapshot(),
    )
