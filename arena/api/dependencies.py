"""FastAPI dependency injection: provides the SessionGateway singleton."""

from __future__ import annotations

from arena.api.gateway import SessionGateway

_gateway: SessionGateway | None = None


def set_gateway(gateway: SessionGateway | None) -> None:
    global _gateway
    _gateway = gateway


def get_gateway() -> SessionGateway:
    if _gateway is None:
        raise RuntimeError("SessionGateway not initialized; server not started correctly.")
    return _gateway
