from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Optional, Protocol


class RuleKind(str, Enum):
    GRIEF = "grief"
    WASTE = "waste"
    NSFW = "nsfw"
    BYPASS = "bypass"


@dataclass(frozen=True, slots=True)
class RuleInfo:
    tag: str
    desc_en: str
    desc_ru: str
    duration: dt.timedelta


RULE_INFO: dict[RuleKind, RuleInfo] = {
    RuleKind.GRIEF: RuleInfo(
        tag="grief",
        desc_en="Intentionally causing harm to your team.",
        desc_ru="Умышленное причинение вреда своей команде.",
        duration=dt.timedelta(days=7),
    ),
    RuleKind.WASTE: RuleInfo(
        tag="waste",
        desc_en="A waste of resources or free space.",
        desc_ru="Бесполезная трата ресурсов или свободного места.",
        duration=dt.timedelta(days=1),
    ),
    RuleKind.NSFW: RuleInfo(
        tag="nsfw",
        desc_en="Posting explicit or otherwise inappropriate content.",
        desc_ru="Публикация откровенного или неприемлемого контента.",
        duration=dt.timedelta(days=1),
    ),
    RuleKind.BYPASS: RuleInfo(
        tag="bypass",
        desc_en="Evading a punishment issued to another account.",
        desc_ru="Обход наказания, выданного другому аккаунту.",
        duration=dt.timedelta(days=7),
    ),
}


class Category(Protocol):
    """Anything the ban timer can group on: hashable, with a fixed base duration."""

    def __hash__(self) -> int: ...

    def base_duration(self) -> dt.timedelta: ...


@dataclass(frozen=True, slots=True)
class Rule:
    """
    A broken rule. Only `bypass` carries a payload (the other player involved),
    and two bypass rules are equal only when their players are equal.
    """

    kind: RuleKind
    player: Optional[Hashable] = None

    def __post_init__(self) -> None:
        if self.kind == RuleKind.BYPASS:
            if self.player is None:
                raise ValueError("bypass rule requires a player")
        elif self.player is not None:
            raise ValueError(f"{self.kind.value} rule does not take a player")

    @classmethod
    def bypass(cls, player: Hashable) -> "Rule":
        return cls(RuleKind.BYPASS, player)

    @classmethod
    def from_tag(cls, tag: str, player: Optional[Hashable] = None) -> "Rule":
        try:
            kind = RuleKind(tag.strip().lower())
        except ValueError:
            raise ValueError(f"unknown rule tag: {tag!r}") from None
        return cls(kind, player)

    @property
    def tag(self) -> str:
        return self.info().tag

    def info(self) -> RuleInfo:
        return RULE_INFO[self.kind]

    def base_duration(self) -> dt.timedelta:
        return self.info().duration


GRIEF = Rule(RuleKind.GRIEF)
WASTE = Rule(RuleKind.WASTE)
NSFW = Rule(RuleKind.NSFW)
