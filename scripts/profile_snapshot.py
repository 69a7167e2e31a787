#!/usr/bin/env python3
"""gameUpdate payload profiler.

Usage:
    python scripts/profile_snapshot.py
    python scripts/profile_snapshot.py --players 10 50 200 --rounds 500

Reports, per player count:
    - gameUpdate JSON size (bytes/KB) and per-player entry size
    - Mean encode time per snapshot
    - Outbound bandwidth per client and for the whole server at the snapshot rate
"""

from __future__ import annotations

import argparse
import os
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from arena.config import ArenaConfig
from arena.engine.game_engine import GameEngine
from arena.protocol.codec import encode_event


def _fmt(size: float) -> str:
    """Format byte size as human-readable."""
    if size < 1024:
        return f"{size:,.0f} B"
    return f"{size:,.0f} B ({size / 1024:.1f} KB)"


def _measure(player_count: int, rounds: int, config: ArenaConfig) -> dict:
    engine = GameEngine(config)
    for i in range(player_count):
        engine.join(f"bot-{i}")

    event = engine.snapshot_event()
    assert event is not None
    payload = encode_event(event)

    start = time.perf_counter()
    for _ in range(rounds):
        encode_event(engine.snapshot_event())
    elapsed = time.perf_counter() - start

    size = len(payload.encode())
    per_client = size * config.snapshot_hz
    return {
        "players": player_count,
        "size": size,
        "per_player": size / player_count,
        "encode_ms": elapsed / rounds * 1000,
        "per_client_bps": per_client,
        "server_bps": per_client * player_count,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile gameUpdate snapshot cost")
    parser.add_argument("--players", type=int, nargs="+", default=[1, 10, 50, 100, 250])
    parser.add_argument("--rounds", type=int, default=200)
    parser.add_argument("--hz", type=float, default=30.0)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    config = ArenaConfig(snapshot_hz=args.hz, world_seed=args.seed)
    print(f"Snapshot rate: {config.snapshot_hz:.0f} Hz\n")
    print(f"{'players':>8} | {'payload':>22} | {'per player':>10} | {'encode':>9} | {'per client/s':>22} | {'server/s':>22}")
    print("-" * 110)
    for count in args.players:
        r = _measure(count, args.rounds, config)
        print(
            f"{r['players']:>8} | {_fmt(r['size']):>22} | {r['per_player']:>8.0f} B | "
            f"{r['encode_ms']:>6.2f} ms | {_fmt(r['per_client_bps']):>22} | {_fmt(r['server_bps']):>22}"
        )


if __name__ == "__main__":
    main()
