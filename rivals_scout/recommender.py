# rivals_scout/recommender.py
"""
Rank heroes worth banning from a batch of scraped player results.
"""

import re
from typing import List, Optional, Sequence, Set, Tuple

from rivals_scout.models import BanRecommendation, HeroStat, PlayerResult
from rivals_scout.thresholds import (
    HIGH_WIN_RATE,
    HIGH_KDA,
    MIN_SAMPLE_GAMES,
    MAIN_HERO_GAMES,
    MAIN_HERO_BONUS,
    KDA_WEIGHT,
    WIN_RATE_GAMES_DIVISOR,
    MAX_BAN_RECOMMENDATIONS,
)

SUMMARY_LINE_RE = re.compile(r"^\s*(\d+)\.\s+Ban\s+(.+?)\s+-\s+(.*)$")


def _fmt(value: float) -> str:
    return f"{value:g}"


class BanRecommender:
    """Rank heroes worth banning from a batch of scraped player results."""

    def __init__(self, limit: int = MAX_BAN_RECOMMENDATIONS):
        self.limit = limit

    def recommend(self, results: Sequence[PlayerResult]) -> List[BanRecommendation]:
        """
        Score every hero across all successful players.

        The first qualifying entry for a hero name wins; later entries for the
        same hero are skipped even if they would score higher. Every matching
        rule adds to the score, but the reason comes from the first rule that
        matched.
        """
        seen: Set[str] = set()
        candidates: List[BanRecommendation] = []

        for result in results:
            if not result.ok:
                continue
            for hero in result.heroes:
                if hero.hero_name in seen:
                    continue
                priority, reason = self._score(result.handle, hero)
                if priority > 0:
                    candidates.append(BanRecommendation(
                        hero=hero,
                        player=result.handle,
                        priority_score=priority,
                        reason=reason or "",
                    ))
                    seen.add(hero.hero_name)

        ranked = sorted(candidates, key=lambda rec: rec.priority_score, reverse=True)
        return ranked[:self.limit]

    @staticmethod
    def _score(player: str, hero: HeroStat) -> Tuple[float, Optional[str]]:
        games = hero.games
        priority = 0.0
        reason: Optional[str] = None

        if hero.win_rate > HIGH_WIN_RATE and games >= MIN_SAMPLE_GAMES:
            priority += hero.win_rate * games / WIN_RATE_GAMES_DIVISOR
            reason = f"{player} has {_fmt(hero.win_rate)}% win rate with {games} games"

        if hero.kda > HIGH_KDA and games >= MIN_SAMPLE_GAMES:
            priority += hero.kda * KDA_WEIGHT
            if reason is None:
                reason = f"{player} has {_fmt(hero.kda)} KDA with {hero.hero_name}"

        if games >= MAIN_HERO_GAMES:
            priority += MAIN_HERO_BONUS
            if reason is None:
                reason = f"{player} mainly plays {hero.hero_name} ({games} games)"

        return priority, reason


def format_summary(recommendations: Sequence[BanRecommendation]) -> str:
    """Render recommendations as '<rank>. Ban <hero> - <reason>' lines."""
    return "\n".join(
        f"{rank}. Ban {rec.hero_name} - {rec.reason}"
        for rank, rec in enumerate(recommendations, start=1)
    )


def parse_summary(text: str) -> List[Tuple[int, str, str]]:
    """Read a rendered summary back into (rank, hero, reason) tuples."""
    parsed: List[Tuple[int, str, str]] = []
    for line in (text or "").splitlines():
        match = SUMMARY_LINE_RE.match(line)
        if match:
            parsed.append((int(match.group(1)), match.group(2), match.group(3)))
    return parsed
