"""
Typed records passed between the scraper, the recommender and the web layer.

All records are frozen; ``to_dict`` produces the camelCase shape the frontend
consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class RoleStat:
    role_name: str
    icon_url: str = ""
    play_rate_percent: float = 0.0
    win_rate: float = 0.0
    wins: int = 0
    kda: float = 0.0
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roleName": self.role_name,
            "iconUrl": self.icon_url,
            "playRatePercent": self.play_rate_percent,
            "winRate": self.win_rate,
            "wins": self.wins,
            "kda": self.kda,
            "kills": self.kills,
            "deaths": self.deaths,
            "assists": self.assists,
        }


@dataclass(frozen=True)
class HeroStat:
    hero_name: str
    icon_url: str = ""
    win_rate: float = 0.0
    wins: int = 0
    losses: int = 0
    kda: float = 0.0
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heroName": self.hero_name,
            "iconUrl": self.icon_url,
            "winRate": self.win_rate,
            "wins": self.wins,
            "losses": self.losses,
            "kda": self.kda,
            "kills": self.kills,
            "deaths": self.deaths,
            "assists": self.assists,
        }


@dataclass(frozen=True)
class PlayerResult:
    """Terminal outcome of one handle's scrape pipeline."""

    handle: str
    status: str
    message: str
    roles: Tuple[RoleStat, ...] = field(default_factory=tuple)
    heroes: Tuple[HeroStat, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls, handle: str, roles, heroes, message: str = "Page loaded successfully") -> "PlayerResult":
        return cls(handle=handle, status=STATUS_SUCCESS, message=message,
                   roles=tuple(roles), heroes=tuple(heroes))

    @classmethod
    def error(cls, handle: str, message: str) -> "PlayerResult":
        return cls(handle=handle, status=STATUS_ERROR, message=message)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerName": self.handle,
            "status": self.status,
            "message": self.message,
            "roles": [role.to_dict() for role in self.roles],
            "heroes": [hero.to_dict() for hero in self.heroes],
        }


@dataclass(frozen=True)
class BanRecommendation:
    hero: HeroStat
    player: str
    priority_score: float
    reason: str

    @property
    def hero_name(self) -> str:
        return self.hero.hero_name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hero": self.hero.hero_name,
            "heroIconUrl": self.hero.icon_url,
            "player": self.player,
            "priorityScore": round(self.priority_score, 2),
            "reason": self.reason,
        }
