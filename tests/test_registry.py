"""Tests for the PlayerRegistry: ids, names, spawning, removal."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from arena.config import ArenaConfig
from arena.core.enums import NameStyle
from arena.core.registry import PlayerRegistry
from arena.systems.rng import DeterministicRNG


def _registry(seed: int = 42, **overrides) -> PlayerRegistry:
    config = ArenaConfig(world_seed=seed, **overrides)
    return PlayerRegistry(config, DeterministicRNG(seed))


class TestAdd:
    def test_ids_are_sequential_and_unique(self):
        reg = _registry()
        ids = [reg.add().id for _ in range(5)]
        assert ids == ["player_1", "player_2", "player_3", "player_4", "player_5"]

    def test_requested_name_is_used(self):
        reg = _registry()
        assert reg.add("alice").name == "alice"

    def test_default_name_uses_counter(self):
        reg = _registry()
        reg.add("alice")
        assert reg.add().name == "Player 2"
        assert reg.add("").name == "Player 3"

    def test_whitespace_name_falls_back_to_default(self):
        reg = _registry()
        assert reg.add("   ").name == "Player 1"

    def test_name_is_trimmed_and_capped(self):
        reg = _registry(max_name_length=8)
        assert reg.add("  a very long name  ").name == "a very l"

    def test_non_printable_characters_dropped(self):
        reg = _registry()
        assert reg.add("bo\x00b\n").name == "bob"

    def test_random_name_style(self):
        reg = _registry(name_style=NameStyle.RANDOM)
        name = reg.add().name
        assert name.startswith("Player#")
        assert len(name) == len("Player#") + 6

    def test_fresh_player_state(self):
        cfg = ArenaConfig(world_seed=1)
        reg = PlayerRegistry(cfg, DeterministicRNG(1))
        p = reg.add("alice")
        assert p.size == cfg.min_player_size
        assert p.health == p.max_health == cfg.max_health
        assert (p.kills, p.deaths, p.points) == (0, 0, 0)
        assert p.is_attacking is False
        assert p.attack_type is None

    def test_spawn_inside_inset_rectangle(self):
        cfg = ArenaConfig(world_seed=3)
        reg = PlayerRegistry(cfg, DeterministicRNG(3))
        margin = cfg.max_player_size / 2
        for _ in range(200):
            p = reg.add()
            assert margin <= p.x <= cfg.map_width - margin
            assert margin <= p.y <= cfg.map_height - margin

    def test_same_seed_same_spawns(self):
        reg1, reg2 = _registry(seed=9), _registry(seed=9)
        spawns1 = [(p.x, p.y, p.color) for p in (reg1.add() for _ in range(10))]
        spawns2 = [(p.x, p.y, p.color) for p in (reg2.add() for _ in range(10))]
        assert spawns1 == spawns2

    def test_different_seed_different_spawns(self):
        p1 = _registry(seed=1).add()
        p2 = _registry(seed=2).add()
        assert (p1.x, p1.y) != (p2.x, p2.y)


class TestLookupAndRemove:
    def test_get_and_contains(self):
        reg = _registry()
        p = reg.add()
        assert reg.get(p.id) is p
        assert p.id in reg
        assert reg.get("player_99") is None

    def test_all_follows_join_order(self):
        reg = _registry()
        players = [reg.add(f"p{i}") for i in range(4)]
        assert reg.all() == players
        assert reg.ids() == [p.id for p in players]

    def test_remove_returns_player(self):
        reg = _registry()
        p = reg.add()
        assert reg.remove(p.id) is p
        assert len(reg) == 0

    def test_remove_is_idempotent(self):
        reg = _registry()
        p = reg.add()
        reg.remove(p.id)
        assert reg.remove(p.id) is None
        assert reg.remove("never-existed") is None
        assert len(reg) == 0

    def test_ids_not_reused_after_remove(self):
        reg = _registry()
        first = reg.add()
        reg.remove(first.id)
        assert reg.add().id == "player_2"


class TestRename:
    def test_rename_returns_old_name(self):
        reg = _registry()
        p = reg.add("alice")
        assert reg.rename(p, "alicia") == "alice"
        assert p.name == "alicia"

    def test_empty_rename_restores_default(self):
        reg = _registry()
        p = reg.add("alice")
        reg.rename(p, "")
        assert p.name == "Player 1"
