# rivals_scout/thresholds.py
"""Cut-offs used by the ban recommender."""

HIGH_WIN_RATE = 55.0
HIGH_KDA = 3.0
MIN_SAMPLE_GAMES = 10
MAIN_HERO_GAMES = 20
MAIN_HERO_BONUS = 90.0
KDA_WEIGHT = 10.0
WIN_RATE_GAMES_DIVISOR = 10.0
MAX_BAN_RECOMMENDATIONS = 5
