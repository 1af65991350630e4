# rivals_scout/scraper/profile.py
"""
Extract role and hero statistics from a loaded tracker profile overview.

The overview renders a series of ``section.v3-card`` cards. The first card
holds the role breakdown, the second the top heroes; each entry inside a card
is a ``.flex.gap-4.items-center`` row with an icon and a block of stat text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

from ..models import HeroStat, RoleStat

CARD_SELECTOR = "section.v3-card"
ROW_SELECTOR = ".flex.gap-4.items-center"

PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*%")
WINS_RE = re.compile(r"(\d[\d,]*)\s*W\b")
LOSSES_RE = re.compile(r"(\d[\d,]*)\s*L\b")
KDA_RE = re.compile(r"(?:(\d+(?:\.\d+)?)\s*KDA\b|\bKDA\s*(\d+(?:\.\d+)?))", re.I)
KDA_SPLIT_RE = re.compile(r"(\d[\d,]*)\s*/\s*(\d[\d,]*)\s*/\s*(\d[\d,]*)")


def parse_percent(pct_str: Optional[str]) -> float:
    """Parse '51.9%' -> 51.9."""
    clean = (pct_str or "").replace("%", "").strip()
    if clean == "":
        return 0.0
    try:
        return float(clean)
    except ValueError:
        return 0.0


def parse_number(num_str: Optional[str]) -> int:
    """Parse comma-formatted integer strings."""
    clean = re.sub(r"[^\d-]", "", num_str or "")
    if clean in ("", "-"):
        return 0
    try:
        return int(clean)
    except ValueError:
        return 0


def parse_ratio(ratio_str: Optional[str]) -> float:
    """Parse KDA float string safely."""
    clean = re.sub(r"[^0-9.]", "", ratio_str or "")
    if clean == "":
        return 0.0
    try:
        return float(clean)
    except ValueError:
        return 0.0


@dataclass(frozen=True)
class ProfileStats:
    roles: Tuple[RoleStat, ...] = field(default_factory=tuple)
    heroes: Tuple[HeroStat, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roles": [role.to_dict() for role in self.roles],
            "heroes": [hero.to_dict() for hero in self.heroes],
        }


class ProfileScraper:
    """Read-only transform from a profile DOM snapshot into typed records."""

    async def scrape(self, page) -> ProfileStats:
        """Snapshot the current page content and parse it."""
        html = await page.content()
        return self.parse_html(html)

    def parse_html(self, html: str) -> ProfileStats:
        soup = BeautifulSoup(html or "", "html.parser")
        cards = soup.select(CARD_SELECTOR)

        roles: List[RoleStat] = []
        heroes: List[HeroStat] = []
        if len(cards) >= 1:
            roles = [self._parse_role_row(row) for row in cards[0].select(ROW_SELECTOR)]
        if len(cards) >= 2:
            heroes = [self._parse_hero_row(row) for row in cards[1].select(ROW_SELECTOR)]

        return ProfileStats(
            roles=tuple(r for r in roles if r.role_name),
            heroes=tuple(h for h in heroes if h.hero_name),
        )

    # --- Row parsing ---

    @staticmethod
    def _row_identity(row) -> Tuple[str, str, List[str]]:
        """Return (name, icon_url, text_chunks) for a card row."""
        chunks = list(row.stripped_strings)
        img = row.find("img")
        name = ""
        icon_url = ""
        if img is not None:
            name = (img.get("alt") or "").strip()
            icon_url = (img.get("src") or "").strip()
        if not name and chunks:
            name = chunks[0]
        return name, icon_url, chunks

    @staticmethod
    def _kda_fields(text: str) -> Tuple[float, int, int, int]:
        kda = 0.0
        kda_match = KDA_RE.search(text)
        if kda_match:
            kda = parse_ratio(kda_match.group(1) or kda_match.group(2))

        kills = deaths = assists = 0
        split_match = KDA_SPLIT_RE.search(text)
        if split_match:
            kills = parse_number(split_match.group(1))
            deaths = parse_number(split_match.group(2))
            assists = parse_number(split_match.group(3))
        return kda, kills, deaths, assists

    def _parse_role_row(self, row) -> RoleStat:
        # Role rows show play rate first, then win rate.
        name, icon_url, chunks = self._row_identity(row)
        text = " ".join(chunks)
        percents = PERCENT_RE.findall(text)
        wins_match = WINS_RE.search(text)
        kda, kills, deaths, assists = self._kda_fields(text)
        return RoleStat(
            role_name=name,
            icon_url=icon_url,
            play_rate_percent=parse_percent(percents[0]) if len(percents) > 0 else 0.0,
            win_rate=parse_percent(percents[1]) if len(percents) > 1 else 0.0,
            wins=parse_number(wins_match.group(1)) if wins_match else 0,
            kda=kda,
            kills=kills,
            deaths=deaths,
            assists=assists,
        )

    def _parse_hero_row(self, row) -> HeroStat:
        name, icon_url, chunks = self._row_identity(row)
        text = " ".join(chunks)
        percents = PERCENT_RE.findall(text)
        wins_match = WINS_RE.search(text)
        losses_match = LOSSES_RE.search(text)
        kda, kills, deaths, assists = self._kda_fields(text)
        return HeroStat(
            hero_name=name,
            icon_url=icon_url,
            win_rate=parse_percent(percents[0]) if percents else 0.0,
            wins=parse_number(wins_match.group(1)) if wins_match else 0,
            losses=parse_number(losses_match.group(1)) if losses_match else 0,
            kda=kda,
            kills=kills,
            deaths=deaths,
            assists=assists,
        )
