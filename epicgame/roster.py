from pathlib import Path
from typing import Any, Dict, List, NamedTuple

from epicgame.constants import DEFAULT_PARAMS_FILEPATH, GAME_CONTRACT_NAME
from epicgame.utils import _load_yaml

CHARACTER_FIELDS = ("name", "image_uri", "hp", "attack")


class GameConfigError(ValueError):
    pass


class RosterEntry(NamedTuple):
    """A playable character."""

    name: str
    image_uri: str
    hp: int
    attack: int


class BossRecord(NamedTuple):
    """The single boss character, passed to the contract separately from the roster."""

    name: str
    image_uri: str
    hp: int
    attack: int


def _parse_stat(value: Any, field: str, character: str) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise GameConfigError(f"'{field}' of '{character}' must be an integer, got {value!r}")
    if value < 0:
        raise GameConfigError(f"'{field}' of '{character}' must not be negative, got {value}")
    return value


def _parse_character(data: Any, kind: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise GameConfigError(f"Malformed {kind} entry: {data!r}")
    missing = [field for field in CHARACTER_FIELDS if field not in data]
    if missing:
        raise GameConfigError(f"{kind.capitalize()} entry is missing {', '.join(missing)}")

    name = str(data["name"])
    return dict(
        name=name,
        image_uri=str(data["image_uri"]),
        hp=_parse_stat(data["hp"], "hp", name),
        attack=_parse_stat(data["attack"], "attack", name),
    )


class GameConfig:
    """
    Game balance data handed to the game contract's constructor:
    an ordered roster of characters plus one boss.
    """

    def __init__(
        self,
        roster: List[RosterEntry],
        boss: BossRecord,
        contract_name: str = GAME_CONTRACT_NAME,
    ):
        self.roster = tuple(roster)
        self.boss = boss
        self.contract_name = contract_name

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self.roster]

    @property
    def image_uris(self) -> List[str]:
        return [entry.image_uri for entry in self.roster]

    @property
    def hps(self) -> List[int]:
        return [entry.hp for entry in self.roster]

    @property
    def attacks(self) -> List[int]:
        return [entry.attack for entry in self.roster]

    def constructor_args(self) -> List[Any]:
        """
        Returns the positional constructor arguments: the four roster
        sequences followed by the flattened boss fields.
        """
        return [
            self.names,
            self.image_uris,
            self.hps,
            self.attacks,
            self.boss.name,
            self.boss.image_uri,
            self.boss.hp,
            self.boss.attack,
        ]

    def constructor_params(self) -> Dict[str, Any]:
        """Returns the constructor arguments keyed by name, for display."""
        return dict(
            characterNames=self.names,
            characterImageURIs=self.image_uris,
            characterHp=self.hps,
            characterAttackDmg=self.attacks,
            bossName=self.boss.name,
            bossImageURI=self.boss.image_uri,
            bossHp=self.boss.hp,
            bossAttackDamage=self.boss.attack,
        )

    @classmethod
    def from_dict(cls, data: Dict) -> "GameConfig":
        if not isinstance(data, dict):
            raise GameConfigError("Game config must be a mapping.")

        if "roster" not in data:
            raise GameConfigError("Game config missing 'roster' field.")
        roster_data = data["roster"]
        if not isinstance(roster_data, list):
            raise GameConfigError(f"'roster' must be a list, got {roster_data!r}")
        if not roster_data:
            raise GameConfigError("'roster' is empty.")
        boss_data = data.get("boss")
        if not boss_data:
            raise GameConfigError("Game config missing 'boss' field.")

        roster = [RosterEntry(**_parse_character(entry, "roster")) for entry in roster_data]
        boss = BossRecord(**_parse_character(boss_data, "boss"))
        contract_name = data.get("contract", GAME_CONTRACT_NAME)
        return cls(roster=roster, boss=boss, contract_name=contract_name)

    @classmethod
    def from_yaml(cls, filepath: Path) -> "GameConfig":
        return cls.from_dict(_load_yaml(filepath))

    @classmethod
    def default(cls) -> "GameConfig":
        return cls.from_yaml(DEFAULT_PARAMS_FILEPATH)

    def __eq__(self, other):
        if not isinstance(other, GameConfig):
            return NotImplemented
        return (self.roster, self.boss, self.contract_name) == (
            other.roster,
            other.boss,
            other.contract_name,
        )

    def __hash__(self):
        return hash((self.roster, self.boss, self.contract_name))

    def __repr__(self):
        return (
            f"GameConfig(roster={list(self.roster)!r}, boss={self.boss!r}, "
            f"contract_name={self.contract_name!r})"
        )
