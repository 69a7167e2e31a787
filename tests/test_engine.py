"""Tests for the GameEngine: join/leave, dispatch, rename, ticks and snapshots."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio

from arena.core.enums import OutboundType
from arena.engine.scheduler import TickScheduler
from arena.protocol.codec import decode_frame
from tests.helpers.arena_harness import ArenaHarness, of_type, types


class TestJoinLeave:
    def test_join_sends_init_to_joiner_only(self):
        arena = ArenaHarness()
        arena.join("first")
        player, events = arena.engine.join("second")
        assert types(events) == [OutboundType.INIT, OutboundType.PLAYER_JOINED]
        init, joined = events
        assert init.only == player.id
        assert init.payload.player_id == player.id
        assert [p.name for p in init.payload.players] == ["first", "second"]
        assert joined.exclude == player.id
        assert joined.payload.id == player.id
        assert joined.payload.name == "second"

    def test_init_includes_the_joiner(self):
        arena = ArenaHarness()
        player, events = arena.engine.join(None)
        assert [p.id for p in events[0].payload.players] == [player.id]

    def test_join_then_leave_restores_size(self):
        arena = ArenaHarness()
        arena.join("stayer")
        before = len(arena.registry)
        player, _ = arena.engine.join("visitor")
        events = arena.engine.leave(player.id)
        assert len(arena.registry) == before
        assert types(events) == [OutboundType.PLAYER_LEFT]
        assert events[0].payload.id == player.id

    def test_leave_twice_emits_once(self):
        arena = ArenaHarness()
        player = arena.join("p")
        assert len(arena.engine.leave(player.id)) == 1
        assert arena.engine.leave(player.id) == []


class TestDispatch:
    def test_move_message(self):
        arena = ArenaHarness()
        p = arena.join("p")
        events = arena.engine.dispatch(p.id, decode_frame('{"type":"move","data":{"x":-5,"y":50,"facing":-1}}'))
        assert (p.x, p.y, p.facing) == (10, 50, -1)
        assert types(events) == [OutboundType.PLAYER_MOVED]

    def test_attack_message(self):
        arena = ArenaHarness()
        a = arena.join("a", at=(100, 100))
        b = arena.join("b", at=(120, 100))
        frame = '{"type":"attack","data":{"attackType":"kick","x":0,"y":0}}'
        events = arena.engine.dispatch(a.id, decode_frame(frame))
        assert b.health == 65
        assert of_type(events, OutboundType.PLAYER_ATTACKED)[0].payload.attack_type == "kick"

    def test_rename_message(self):
        arena = ArenaHarness()
        p = arena.join("old")
        events = arena.engine.dispatch(p.id, decode_frame('{"type":"rename","data":{"newName":"new"}}'))
        assert p.name == "new"
        assert types(events) == [OutboundType.PLAYER_RENAMED]
        payload = events[0].payload
        assert (payload.id, payload.old_name, payload.new_name) == (p.id, "old", "new")
        assert events[0].exclude is None

    def test_second_join_ignored(self):
        arena = ArenaHarness()
        p = arena.join("p")
        assert arena.engine.dispatch(p.id, decode_frame('{"type":"join","data":{"name":"again"}}')) == []
        assert len(arena.registry) == 1
        assert p.name == "p"

    def test_unknown_player_ignored(self):
        arena = ArenaHarness()
        assert arena.engine.dispatch("player_404", decode_frame('{"type":"attack"}')) == []


class TestAttackDecay:
    def test_punch_animation_clears_after_enough_ticks(self):
        arena = ArenaHarness()
        p = arena.join("p")
        arena.attack(p, "punch")
        tick = arena.config.attack_tick_ms
        for _ in range(18):
            arena.engine.decay_attack_timers(tick)
        assert p.is_attacking is True
        assert arena.engine.decay_attack_timers(tick) == 1
        assert p.is_attacking is False
        assert p.attack_type is None

    def test_idle_players_untouched(self):
        arena = ArenaHarness()
        p = arena.join("p")
        assert arena.engine.decay_attack_timers(1000) == 0
        assert p.attack_timer == 0


class TestSnapshot:
    def test_no_snapshot_when_empty(self):
        arena = ArenaHarness()
        assert arena.engine.snapshot_event() is None

    def test_snapshot_matches_registry(self):
        arena = ArenaHarness()
        for i in range(6):
            arena.join(f"p{i}")
        gone = arena.join("gone")
        arena.engine.leave(gone.id)
        event = arena.engine.snapshot_event()
        ids = [p.id for p in event.payload.players]
        assert event.type == OutboundType.GAME_UPDATE
        assert len(ids) == len(arena.registry) == 6
        assert len(set(ids)) == len(ids)
        assert set(ids) == set(arena.registry.ids())

    def test_snapshot_is_a_copy(self):
        arena = ArenaHarness()
        p = arena.join("p", at=(50, 50))
        snap = arena.engine.snapshot()
        p.x = 400
        assert snap.players[0].x == 50
        assert snap.ids() == [p.id]

    def test_snapshot_sequence_increments(self):
        arena = ArenaHarness()
        arena.join("p")
        first = arena.engine.snapshot()
        second = arena.engine.snapshot()
        assert second.sequence == first.sequence + 1

    def test_snapshot_carries_attack_state(self):
        arena = ArenaHarness()
        p = arena.join("p")
        arena.attack(p, "kick")
        entry = arena.engine.snapshot_event().payload.players[0]
        assert entry.is_attacking is True
        assert entry.attack_type == "kick"


class TestTickScheduler:
    def test_snapshot_tick_publishes(self):
        arena = ArenaHarness()
        published = []
        scheduler = TickScheduler(arena.engine, published.extend)
        assert scheduler.run_snapshot_tick() is False
        arena.join("p")
        assert scheduler.run_snapshot_tick() is True
        assert types(published) == [OutboundType.GAME_UPDATE]
        assert scheduler.snapshots_sent == 1

    def test_decay_tick_uses_configured_interval(self):
        arena = ArenaHarness(attack_tick_ms=100)
        p = arena.join("p")
        arena.attack(p, "punch")
        scheduler = TickScheduler(arena.engine, lambda events: None)
        scheduler.run_decay_tick()
        scheduler.run_decay_tick()
        assert p.is_attacking
        scheduler.run_decay_tick()
        assert not p.is_attacking

    def test_start_and_stop(self):
        arena = ArenaHarness(snapshot_hz=200)
        arena.join("p")
        published = []
        scheduler = TickScheduler(arena.engine, published.extend)

        async def run():
            scheduler.start()
            assert scheduler.running
            await asyncio.sleep(0.1)
            await scheduler.stop()

        asyncio.run(run())
        assert not scheduler.running
        assert scheduler.snapshots_sent >= 2
        assert all(e.type == OutboundType.GAME_UPDATE for e in published)

    def test_failing_tick_does_not_stop_loop(self):
        arena = ArenaHarness(snapshot_hz=200)
        arena.join("p")
        calls = []

        def flaky_publish(events):
            calls.append(events)
            if len(calls) == 1:
                raise RuntimeError("boom")

        scheduler = TickScheduler(arena.engine, flaky_publish)

        async def run():
            scheduler.start()
            await asyncio.sleep(0.1)
            await scheduler.stop()

        asyncio.run(run())
        assert len(calls) >= 2
