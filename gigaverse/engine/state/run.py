"""
Run State for the Gigaverse dungeon.

Optimized for:
1. Fast copying (for tree search)
2. Minimal memory footprint
3. Easy serialization

A run is one player fighting an ordered list of enemies, with an optional
loot phase after each victory. Fighters are plain records; every rule lives
in the combat engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union


MAX_CHARGES = 3
SPAM_LOCKED = -1
MAX_LOOT_OPTIONS = 4


class InvalidRunStateError(ValueError):
    """Raised when a RunState violates one of its invariants."""


# =============================================================================
# Moves and Loot Kinds
# =============================================================================


class Move(Enum):
    """The three rock-paper-scissors moves."""

    ROCK = "rock"
    PAPER = "paper"
    SCISSOR = "scissor"


ALL_MOVES = (Move.ROCK, Move.PAPER, Move.SCISSOR)


class LootKind(str, Enum):
    """Boon types offered during a loot phase (server spelling)."""

    HEAL = "Heal"
    ADD_MAX_HEALTH = "AddMaxHealth"
    ADD_MAX_ARMOR = "AddMaxArmor"
    UPGRADE_ROCK = "UpgradeRock"
    UPGRADE_PAPER = "UpgradePaper"
    UPGRADE_SCISSOR = "UpgradeScissor"

    @classmethod
    def parse(cls, value: str) -> Optional[LootKind]:
        """Return the matching kind, or None for an unrecognised string."""
        try:
            return cls(value)
        except ValueError:
            return None


UPGRADE_KINDS = {
    LootKind.UPGRADE_ROCK: Move.ROCK,
    LootKind.UPGRADE_PAPER: Move.PAPER,
    LootKind.UPGRADE_SCISSOR: Move.SCISSOR,
}


# =============================================================================
# Action Types
# =============================================================================


class ActionType(Enum):
    """Types of actions the player can take."""

    MOVE_ROCK = "rock"
    MOVE_PAPER = "paper"
    MOVE_SCISSOR = "scissor"
    PICK_LOOT = "loot"


_LOOT_WIRE_NAMES = ("loot_one", "loot_two", "loot_three", "loot_four")

MOVE_FOR_ACTION = {
    ActionType.MOVE_ROCK: Move.ROCK,
    ActionType.MOVE_PAPER: Move.PAPER,
    ActionType.MOVE_SCISSOR: Move.SCISSOR,
}
ACTION_FOR_MOVE = {move: action_type for action_type, move in MOVE_FOR_ACTION.items()}


@dataclass(frozen=True)
class Action:
    """
    An action the player can take.

    Immutable for use as dict keys and in sets.
    """

    action_type: ActionType
    loot_index: int = -1  # Slot in lootOptions for PICK_LOOT

    @classmethod
    def move(cls, move: Move) -> Action:
        return cls(ACTION_FOR_MOVE[move])

    @classmethod
    def pick_loot(cls, index: int) -> Action:
        return cls(ActionType.PICK_LOOT, loot_index=index)

    @property
    def is_loot_pick(self) -> bool:
        return self.action_type is ActionType.PICK_LOOT

    @property
    def as_move(self) -> Optional[Move]:
        return MOVE_FOR_ACTION.get(self.action_type)

    def to_wire(self) -> str:
        """Name the remote game service uses for this action."""
        if self.is_loot_pick:
            if 0 <= self.loot_index < len(_LOOT_WIRE_NAMES):
                return _LOOT_WIRE_NAMES[self.loot_index]
            raise ValueError(f"Loot index {self.loot_index} has no wire name")
        return self.action_type.value

    @classmethod
    def from_wire(cls, name: str) -> Action:
        if name in _LOOT_WIRE_NAMES:
            return cls.pick_loot(_LOOT_WIRE_NAMES.index(name))
        for action_type in MOVE_FOR_ACTION:
            if action_type.value == name:
                return cls(action_type)
        raise ValueError(f"Unknown action name: {name!r}")

    def __repr__(self) -> str:
        if self.is_loot_pick:
            return f"PickLoot({self.loot_index})"
        return f"Move({self.action_type.value})"


MOVE_ROCK = Action(ActionType.MOVE_ROCK)
MOVE_PAPER = Action(ActionType.MOVE_PAPER)
MOVE_SCISSOR = Action(ActionType.MOVE_SCISSOR)


# =============================================================================
# Fighter Records
# =============================================================================


@dataclass
class MoveStat:
    """Attack, defense and remaining charges of one move."""

    attack: int
    defense: int
    charges: int = MAX_CHARGES

    @property
    def is_spam_locked(self) -> bool:
        return self.charges < 0

    def copy(self) -> MoveStat:
        return MoveStat(self.attack, self.defense, self.charges)

    def to_dict(self) -> Dict[str, int]:
        return {"attack": self.attack, "defense": self.defense, "charges": self.charges}


@dataclass
class Pool:
    """A current/max pair; current stays within [0, max]."""

    current: int
    max: int

    @property
    def ratio(self) -> float:
        return self.current / self.max if self.max > 0 else 0.0

    def copy(self) -> Pool:
        return type(self)(self.current, self.max)

    def to_dict(self) -> Dict[str, int]:
        return {"current": self.current, "max": self.max}


class HealthPool(Pool):
    pass


class ArmorPool(Pool):
    pass


@dataclass
class Fighter:
    """Minimal state for the player or an enemy - both share this shape."""

    rock: MoveStat
    paper: MoveStat
    scissor: MoveStat
    health: HealthPool
    armor: ArmorPool

    @property
    def is_dead(self) -> bool:
        return self.health.current <= 0

    def move_stat(self, move: Move) -> MoveStat:
        if move is Move.ROCK:
            return self.rock
        if move is Move.PAPER:
            return self.paper
        return self.scissor

    def move_stats(self) -> List[MoveStat]:
        return [self.rock, self.paper, self.scissor]

    def charged_moves(self) -> List[Move]:
        """Moves with at least one charge, in rock/paper/scissor order."""
        return [m for m in ALL_MOVES if self.move_stat(m).charges > 0]

    def copy(self) -> Fighter:
        return Fighter(
            rock=self.rock.copy(),
            paper=self.paper.copy(),
            scissor=self.scissor.copy(),
            health=self.health.copy(),
            armor=self.armor.copy(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rock": self.rock.to_dict(),
            "paper": self.paper.to_dict(),
            "scissor": self.scissor.to_dict(),
            "health": self.health.to_dict(),
            "armor": self.armor.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Fighter:
        return cls(
            rock=MoveStat(**data["rock"]),
            paper=MoveStat(**data["paper"]),
            scissor=MoveStat(**data["scissor"]),
            health=HealthPool(**data["health"]),
            armor=ArmorPool(**data["armor"]),
        )


@dataclass(frozen=True)
class LootOption:
    """
    One boon offered after a victory.

    Upgrade kinds use value1 for attack and value2 for defense; the other
    kinds only read value1. ``kind`` may hold a raw string when a server
    sends a boon type this engine does not know.
    """

    kind: Union[LootKind, str]
    value1: int = 0
    value2: int = 0

    def to_dict(self) -> Dict[str, Any]:
        kind = self.kind.value if isinstance(self.kind, LootKind) else self.kind
        return {"kind": kind, "value1": self.value1, "value2": self.value2}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LootOption:
        raw = data["kind"]
        return cls(
            kind=LootKind.parse(raw) or raw,
            value1=int(data.get("value1", 0)),
            value2=int(data.get("value2", 0)),
        )


# =============================================================================
# Run State
# =============================================================================


@dataclass
class RunState:
    """
    Complete run state - everything needed to continue simulation.

    currentEnemyIndex only grows; it reaches len(enemies) exactly when the
    run is won. lootPhase is True iff lootOptions is non-empty.
    """

    player: Fighter
    enemies: List[Fighter] = field(default_factory=list)
    current_enemy_index: int = 0
    loot_phase: bool = False
    loot_options: List[LootOption] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Core Methods
    # -------------------------------------------------------------------------

    def copy(self) -> RunState:
        """
        Create a fast copy of the run state.

        LootOption is frozen, so the loot list only needs a shallow copy.
        """
        return RunState(
            player=self.player.copy(),
            enemies=[e.copy() for e in self.enemies],
            current_enemy_index=self.current_enemy_index,
            loot_phase=self.loot_phase,
            loot_options=list(self.loot_options),
        )

    def current_enemy(self) -> Optional[Fighter]:
        if 0 <= self.current_enemy_index < len(self.enemies):
            return self.enemies[self.current_enemy_index]
        return None

    def is_victory(self) -> bool:
        return self.current_enemy_index >= len(self.enemies)

    def is_defeat(self) -> bool:
        return self.player.is_dead

    def is_terminal(self) -> bool:
        """Player dead or no enemies left."""
        return self.is_defeat() or self.is_victory()

    def in_loot_phase(self) -> bool:
        return self.loot_phase and len(self.loot_options) > 0

    # -------------------------------------------------------------------------
    # Action Generation
    # -------------------------------------------------------------------------

    def get_legal_actions(self) -> List[Action]:
        """
        Get all legal actions from the current state.

        Loot picks in array order during a loot phase, otherwise the moves
        with charges left. Never empty: with every move drained or locked,
        rock is returned anyway.
        """
        if self.in_loot_phase():
            return [Action.pick_loot(i) for i in range(len(self.loot_options))]

        actions = [Action.move(m) for m in self.player.charged_moves()]
        if not actions:
            actions.append(MOVE_ROCK)
        return actions

    # -------------------------------------------------------------------------
    # Validation and Serialization
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """Raise InvalidRunStateError listing every broken invariant."""
        problems = []
        fighters = [("player", self.player)] + [
            (f"enemy[{i}]", e) for i, e in enumerate(self.enemies)
        ]
        for name, fighter in fighters:
            for pool_name, pool in (("health", fighter.health), ("armor", fighter.armor)):
                if pool.max < 0 or not 0 <= pool.current <= pool.max:
                    problems.append(
                        f"{name}.{pool_name}={pool.current}/{pool.max} out of range"
                    )
            for move in ALL_MOVES:
                stat = fighter.move_stat(move)
                if not SPAM_LOCKED <= stat.charges <= MAX_CHARGES:
                    problems.append(f"{name}.{move.value}.charges={stat.charges}")
                if stat.attack < 0 or stat.defense < 0:
                    problems.append(f"{name}.{move.value} has negative stats")
        if not 0 <= self.current_enemy_index <= len(self.enemies):
            problems.append(
                f"current_enemy_index={self.current_enemy_index} "
                f"outside 0..{len(self.enemies)}"
            )
        if len(self.loot_options) > MAX_LOOT_OPTIONS:
            problems.append(f"{len(self.loot_options)} loot options")
        if self.loot_phase != bool(self.loot_options):
            problems.append(
                f"loot_phase={self.loot_phase} with {len(self.loot_options)} options"
            )
        if problems:
            raise InvalidRunStateError("; ".join(problems))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player.to_dict(),
            "enemies": [e.to_dict() for e in self.enemies],
            "current_enemy_index": self.current_enemy_index,
            "loot_phase": self.loot_phase,
            "loot_options": [l.to_dict() for l in self.loot_options],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RunState:
        return cls(
            player=Fighter.from_dict(data["player"]),
            enemies=[Fighter.from_dict(e) for e in data.get("enemies", [])],
            current_enemy_index=data.get("current_enemy_index", 0),
            loot_phase=data.get("loot_phase", False),
            loot_options=[LootOption.from_dict(l) for l in data.get("loot_options", [])],
        )


def get_legal_actions(state: RunState) -> List[Action]:
    """Module-level alias for RunState.get_legal_actions."""
    return state.get_legal_actions()


# =============================================================================
# Factory Functions
# =============================================================================


def create_fighter(
    rock: Sequence[int],
    paper: Sequence[int],
    scissor: Sequence[int],
    hp: int,
    armor: int,
    max_hp: int = None,
    max_armor: int = None,
) -> Fighter:
    """
    Create a fighter from (attack, defense[, charges]) triples.

    Pools default to full.
    """

    def _stat(values: Sequence[int]) -> MoveStat:
        charges = values[2] if len(values) > 2 else MAX_CHARGES
        return MoveStat(attack=values[0], defense=values[1], charges=charges)

    return Fighter(
        rock=_stat(rock),
        paper=_stat(paper),
        scissor=_stat(scissor),
        health=HealthPool(hp, max_hp if max_hp is not None else hp),
        armor=ArmorPool(armor, max_armor if max_armor is not None else armor),
    )


def fighter_from_stats(stats: Sequence[int]) -> Fighter:
    """
    Build a fresh enemy from the server's 8-value stat array:
    [rockAtk, rockDef, paperAtk, paperDef, scissorAtk, scissorDef, maxHp, maxArmor].
    """
    if len(stats) < 8:
        raise ValueError(f"Expected 8 move stats, got {len(stats)}")
    return create_fighter(
        rock=(stats[0], stats[1]),
        paper=(stats[2], stats[3]),
        scissor=(stats[4], stats[5]),
        hp=stats[6],
        armor=stats[7],
    )


def create_run(
    player: Fighter,
    enemies: List[Fighter],
    loot_options: List[LootOption] = None,
) -> RunState:
    """Create a run at the first enemy, optionally starting in a loot phase."""
    loot_options = list(loot_options or [])
    return RunState(
        player=player,
        enemies=enemies,
        current_enemy_index=0,
        loot_phase=bool(loot_options),
        loot_options=loot_options,
    )
