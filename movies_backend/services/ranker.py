# movies_backend/services/ranker.py
import random
from typing import Iterable, List, Optional

SCORE_RANGE = 100


def rank(movies: Iterable[dict], rng: Optional[random.Random] = None, field: str = "suggestionScore") -> List[dict]:
    """
    Give each movie a fresh random score in [0, 100) and sort by it, highest first.
    Not a recommendation: it only varies the order between calls.
    """
    rng = rng or random.Random()
    scored = [{**movie, field: rng.randrange(SCORE_RANGE)} for movie in movies]
    scored.sort(key=lambda m: m[field], reverse=True)
    return scored


def get_rng() -> random.Random:
    return random.Random()
