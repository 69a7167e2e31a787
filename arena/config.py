"""Arena configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass, field

from arena.core.enums import CombatMode, NameStyle


@dataclass(frozen=True, slots=True)
class AttackSpec:
    """One attack type: damage, cooldown and reach."""

    name: str
    damage: int
    cooldown_ms: float
    animation_ms: float
    range_bonus: float = 0.0


DEFAULT_ATTACKS: tuple[AttackSpec, ...] = (
    AttackSpec(name="punch", damage=25, cooldown_ms=500, animation_ms=300),
    AttackSpec(name="kick", damage=35, cooldown_ms=800, animation_ms=400, range_bonus=10),
)

# Tuning of the two combat models
_PRESETS: dict[CombatMode, dict] = {
    CombatMode.DAMAGE: dict(max_player_size=80, kill_size_gain=8, kill_heal=30),
    CombatMode.PROXIMITY: dict(max_player_size=100, kill_size_gain=5, kill_heal=20),
}


@dataclass(frozen=True)
class ArenaConfig:
    """Immutable configuration for one server process."""

    # Map
    map_width: float = 800.0
    map_height: float = 600.0

    # Player
    min_player_size: float = 20.0
    max_player_size: float = 80.0
    max_health: int = 100
    max_name_length: int = 32
    name_style: NameStyle = NameStyle.COUNTER

    # Combat
    combat_mode: CombatMode = CombatMode.DAMAGE
    kill_distance: float = 30.0            # Proximity model: extra reach beyond touching
    attack_range: float = 50.0             # Damage model: base reach of every attack
    attacks: tuple[AttackSpec, ...] = field(default=DEFAULT_ATTACKS)

    # Kill transition
    kill_size_gain: float = 8.0
    kill_points: int = 10
    kill_heal: int = 30

    # Tick rates
    attack_tick_ms: float = 16.0
    snapshot_hz: float = 30.0

    # Transport
    outbound_queue_size: int = 256
    max_frame_bytes: int = 4096

    # Randomness (None = fresh seed per process)
    world_seed: int | None = None

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.min_player_size <= 0 or self.min_player_size > self.max_player_size:
            raise ValueError(
                f"player size bounds invalid: min={self.min_player_size} max={self.max_player_size}"
            )
        if self.map_width < self.max_player_size or self.map_height < self.max_player_size:
            raise ValueError(
                f"map {self.map_width}x{self.map_height} cannot fit a player of size {self.max_player_size}"
            )
        if self.max_health <= 0:
            raise ValueError("max_health must be positive")
        if self.attack_tick_ms <= 0 or self.snapshot_hz <= 0:
            raise ValueError("tick rates must be positive")
        if self.outbound_queue_size <= 0:
            raise ValueError("outbound_queue_size must be positive")
        names = [a.name for a in self.attacks]
        if not names or len(names) != len(set(names)):
            raise ValueError(f"attack names must be non-empty and unique: {names}")

    @classmethod
    def preset(cls, mode: CombatMode | str, **overrides) -> ArenaConfig:
        """Config reproducing the constants of one engine variant."""
        mode = CombatMode(mode)
        values = dict(_PRESETS[mode], combat_mode=mode)
        values.update(overrides)
        return cls(**values)

    def attack(self, name: str) -> AttackSpec | None:
        for spec in self.attacks:
            if spec.name == name:
                return spec
        return None

    @property
    def snapshot_interval(self) -> float:
        """Seconds between two ``gameUpdate`` broadcasts."""
        return 1.0 / self.snapshot_hz

    @property
    def spawn_margin(self) -> float:
        """Distance kept from every map edge when (re)spawning."""
        return self.max_player_size / 2
