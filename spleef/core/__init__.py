"""Core spleef primitives (vectors, events, the host contract, roster and arena).

Kept free of FastAPI concerns so it can be driven by any host: the bundled
local host, a real game server adapter, or tests.
"""
