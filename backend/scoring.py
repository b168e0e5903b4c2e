from __future__ import annotations

import random
from typing import Any, Callable, Dict, Optional

from config import BRAND_FIT_SCORER
from llm import analyze_brand_fit

# A scorer takes a discovery candidate and returns a brand-fit score (1-100).
BrandFitScorer = Callable[[Dict[str, Any]], int]

RANDOM_SCORE_RANGE = (60, 100)


def random_brand_fit_score(candidate: Dict[str, Any], rng: Optional[random.Random] = None) -> int:
    """
    Placeholder heuristic: uniform random integer in [60, 100].
    Stands in until a real model is plugged in through BRAND_FIT_SCORER.
    """
    low, high = RANDOM_SCORE_RANGE
    return (rng or random).randint(low, high)


def llm_brand_fit_score(candidate: Dict[str, Any]) -> int:
    # One provider call per candidate; degrades to 75 on any failure.
    return analyze_brand_fit(influencer=candidate)


SCORERS: Dict[str, BrandFitScorer] = {
    "random": random_brand_fit_score,
    "llm": llm_brand_fit_score,
}


def get_brand_fit_scorer(name: Optional[str] = None) -> BrandFitScorer:
    key = (name or BRAND_FIT_SCORER or "random").lower().strip()
    try:
        return SCORERS[key]
    except KeyError:
        raise RuntimeError(f"Unsupported BRAND_FIT_SCORER: {key}")
