"""
Influencer discovery on YouTube.

search_by_query maps channel search results into influencer candidates;
discover_by_category fans a category out over canned search phrases and
stores whatever is new.
"""
import math
import re
import time
from typing import Any, Callable, Dict, List, Optional

from errors import ProviderError
from logging_config import get_logger
from models import Influencer
from scoring import BrandFitScorer, random_brand_fit_score
from storage import RecordStore

logger = get_logger("icy", component="discovery")

MIN_SUBSCRIBERS = 1_000
AVG_VIEWS_RATIO = 0.05  # rough estimate, not a measurement
QUERY_PAUSE_SECONDS = 0.1
DEFAULT_CATEGORY = "lifestyle"

# Tested in order; first match wins. Plain substring matching.
CATEGORY_KEYWORDS = [
    ("tech", re.compile(
        r"tech|technology|programming|coding|software|ai|artificial intelligence|computer"
        r"|developer|review|gadget|phone|iphone|android|laptop")),
    ("beauty", re.compile(r"beauty|makeup|skincare|cosmetic|fashion|style|hair|nails|tutorial")),
    ("fitness", re.compile(r"fitness|workout|exercise|gym|health|nutrition|diet|muscle|training|yoga")),
    ("travel", re.compile(r"travel|adventure|explore|destination|vacation|journey|trip|world|country|city")),
    ("food", re.compile(r"food|cooking|recipe|chef|kitchen|restaurant|meal|cuisine|baking|eating")),
    ("gaming", re.compile(r"gaming|game|gamer|play|stream|esports|minecraft|fortnite|xbox|playstation")),
    ("education", re.compile(r"education|learn|study|tutorial|course|lesson|teach|academic|school|university")),
]

CONTENT_THEMES = {
    "tech": ["product reviews", "tech tutorials", "software demos", "gadget unboxings"],
    "beauty": ["makeup tutorials", "skincare routines", "product reviews", "beauty tips"],
    "fitness": ["workout routines", "nutrition advice", "fitness challenges", "health tips"],
    "travel": ["destination guides", "travel vlogs", "cultural experiences", "adventure stories"],
    "food": ["recipe tutorials", "restaurant reviews", "cooking tips", "food challenges"],
    "gaming": ["gameplay videos", "game reviews", "streaming highlights", "gaming tutorials"],
    "education": ["educational content", "tutorials", "explanations", "learning resources"],
    "lifestyle": ["lifestyle content", "daily vlogs", "personal stories", "recommendations"],
}

CATEGORY_QUERIES = {
    "tech": ["tech review", "technology channel", "programming tutorial", "gadget review", "ai technology"],
    "beauty": ["makeup tutorial", "beauty channel", "skincare routine", "beauty review", "cosmetics"],
    "fitness": ["fitness channel", "workout routine", "health fitness", "gym training", "nutrition"],
    "travel": ["travel vlog", "travel guide", "adventure travel", "world travel", "destination"],
    "food": ["cooking channel", "recipe tutorial", "food review", "chef", "cooking show"],
    "gaming": ["gaming channel", "game review", "gameplay", "gaming tutorial", "esports"],
    "education": ["educational channel", "learning", "tutorial", "how to", "explained"],
}
DEFAULT_QUERIES = ["lifestyle vlog", "daily life", "personal channel"]


def classify_category(title: Optional[str], description: Optional[str]) -> str:
    text = f"{title or ''} {description or ''}".lower()
    for category, pattern in CATEGORY_KEYWORDS:
        if pattern.search(text):
            return category
    return DEFAULT_CATEGORY


def derive_handle(title: str, custom_url: Optional[str] = None) -> str:
    if custom_url:
        return f"@{custom_url.lstrip('@')}"
    return "@" + re.sub(r"\s+", "", title or "").lower()


def content_themes(category: str) -> List[str]:
    return list(CONTENT_THEMES.get(category) or CONTENT_THEMES[DEFAULT_CATEGORY])


def queries_for_category(category: str) -> List[str]:
    return list(CATEGORY_QUERIES.get((category or "").lower(), DEFAULT_QUERIES))


def _avatar_url(thumbnails: Dict[str, Any]) -> Optional[str]:
    for size in ("high", "medium", "default"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return None


def channel_to_candidate(channel: Dict[str, Any], scorer: BrandFitScorer) -> Optional[Dict[str, Any]]:
    """Map a channels.list item to influencer fields; None below the subscriber floor."""
    snippet = channel.get("snippet") or {}
    stats = channel.get("statistics") or {}

    try:
        subscribers = int(stats.get("subscriberCount") or 0)
    except (TypeError, ValueError):
        subscribers = 0

    if subscribers < MIN_SUBSCRIBERS:
        return None

    title = snippet.get("title") or ""
    category = classify_category(title, snippet.get("description"))

    candidate = {
        "name": title,
        "handle": derive_handle(title, snippet.get("customUrl")),
        "platform": "youtube",
        "category": category,
        "followers": subscribers,
        "avg_views": round(subscribers * AVG_VIEWS_RATIO),
        "email": None,  # not exposed by the API
        "avatar": _avatar_url(snippet.get("thumbnails") or {}),
        "channel_id": channel.get("id"),
        "recent_content": content_themes(category),
    }
    candidate["brand_fit_score"] = scorer(candidate)
    return candidate


class InfluencerDiscovery:
    def __init__(
        self,
        store: RecordStore,
        search_client,
        scorer: BrandFitScorer = random_brand_fit_score,
        pause: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.client = search_client
        self.scorer = scorer
        self.pause = pause

    def search_by_query(self, query: str, max_results: int = 20) -> List[Dict[str, Any]]:
        if self.client is None:
            raise ProviderError("YouTube", "search client is not configured")

        max_results = max(1, min(int(max_results), 50))
        channel_ids = self.client.search_channel_ids(query, max_results)
        if not channel_ids:
            return []

        channels = self.client.get_channels(channel_ids)
        candidates = []
        for channel in channels:
            candidate = channel_to_candidate(channel, self.scorer)
            if candidate is not None:
                candidates.append(candidate)

        logger.info(
            "youtube_search",
            extra={"query": query, "found": len(channel_ids), "kept": len(candidates)},
        )
        return candidates

    def save_candidates(self, candidates: List[Dict[str, Any]]) -> List[Influencer]:
        saved = []
        for data in candidates:
            try:
                inf = self.store.insert_influencer_if_new(data)
            except Exception:
                logger.exception("influencer_save_failed", extra={"influencer_name": data.get("name")})
                continue
            if inf is not None:
                saved.append(inf)
        return saved

    def discover_by_category(self, category: str, target_count: int) -> None:
        """
        Runs every canned phrase for the category. A failing phrase is logged
        and skipped; ProviderError is raised only when all of them fail.
        """
        queries = queries_for_category(category)
        per_query = math.ceil(target_count / len(queries))

        failures = 0
        saved_total = 0
        for query in queries:
            try:
                candidates = self.search_by_query(query, per_query)
                saved_total += len(self.save_candidates(candidates))
            except ProviderError as e:
                failures += 1
                logger.error("discovery_query_failed", extra={"query": query, "error": e.message})
            self.pause(QUERY_PAUSE_SECONDS)

        logger.info(
            "discovery_completed",
            extra={"category": category, "target_count": target_count,
                   "saved": saved_total, "failed_queries": failures},
        )

        if failures == len(queries):
            raise ProviderError("YouTube", f"all {failures} searches failed for category '{category}'")
