# seeds.py
# Hand-authored influencers used when YouTube discovery is unavailable, and
# by the demo populate endpoint. Only tech, beauty and fitness have seeds.
from typing import Any, Dict, List

from logging_config import get_logger
from models import Influencer
from storage import RecordStore

logger = get_logger("icy", component="seeds")

SEED_INFLUENCERS: Dict[str, List[Dict[str, Any]]] = {
    "tech": [
        {
            "name": "Alex Chen",
            "handle": "@alextech",
            "platform": "youtube",
            "category": "tech",
            "followers": 245000,
            "avg_views": 12300,
            "email": "alex@techreview.com",
            "avatar": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=100&h=100",
            "channel_id": "UCtech123",
            "brand_fit_score": 87,
            "recent_content": ["AI innovations", "smartphone reviews", "tech tutorials"],
        },
        {
            "name": "Priya Natarajan",
            "handle": "@priyacodes",
            "platform": "youtube",
            "category": "tech",
            "followers": 98000,
            "avg_views": 6100,
            "email": "hello@priyacodes.dev",
            "avatar": None,
            "channel_id": "UCtech456",
            "brand_fit_score": 81,
            "recent_content": ["programming tutorials", "developer tools", "career advice"],
        },
        {
            "name": "Gadget Garage",
            "handle": "@gadgetgarage",
            "platform": "instagram",
            "category": "tech",
            "followers": 54000,
            "avg_views": 2700,
            "email": None,
            "avatar": None,
            "channel_id": None,
            "brand_fit_score": 68,
            "recent_content": ["gadget unboxings", "desk setups", "product reviews"],
        },
    ],
    "beauty": [
        {
            "name": "Sofia Rodriguez",
            "handle": "@sofiabeauty",
            "platform": "youtube",
            "category": "beauty",
            "followers": 189000,
            "avg_views": 8700,
            "email": None,
            "avatar": "https://images.unsplash.com/photo-1494790108755-2616c96d5d2b?w=100&h=100",
            "channel_id": "UCbeauty456",
            "brand_fit_score": 72,
            "recent_content": ["makeup tutorials", "skincare routines", "product reviews"],
        },
        {
            "name": "Glow With Mina",
            "handle": "@glowwithmina",
            "platform": "instagram",
            "category": "beauty",
            "followers": 76000,
            "avg_views": 4200,
            "email": "mina@glowwithmina.com",
            "avatar": None,
            "channel_id": None,
            "brand_fit_score": 79,
            "recent_content": ["clean beauty", "skincare routines", "beauty tips"],
        },
        {
            "name": "Jordan Lee Studio",
            "handle": "@jordanleestudio",
            "platform": "youtube",
            "category": "beauty",
            "followers": 412000,
            "avg_views": 20600,
            "email": "collabs@jordanlee.studio",
            "avatar": None,
            "channel_id": "UCbeauty789",
            "brand_fit_score": 83,
            "recent_content": ["editorial makeup", "product reviews", "hair tutorials"],
        },
    ],
    "fitness": [
        {
            "name": "Marcus Johnson",
            "handle": "@marcusfitness",
            "platform": "youtube",
            "category": "fitness",
            "followers": 321000,
            "avg_views": 15200,
            "email": "marcus.johnson@gmail.com",
            "avatar": "https://images.unsplash.com/photo-1571019613540-b7ba3e1b0fcd?w=100&h=100",
            "channel_id": "UCfitness789",
            "brand_fit_score": 94,
            "recent_content": ["workout routines", "nutrition tips", "fitness motivation"],
        },
        {
            "name": "Yoga With Elena",
            "handle": "@yogawithelena",
            "platform": "youtube",
            "category": "fitness",
            "followers": 143000,
            "avg_views": 7100,
            "email": "elena@yogawithelena.com",
            "avatar": None,
            "channel_id": "UCfitness321",
            "brand_fit_score": 77,
            "recent_content": ["morning yoga", "mobility flows", "health tips"],
        },
        {
            "name": "Lift Lab Kate",
            "handle": "@liftlabkate",
            "platform": "instagram",
            "category": "fitness",
            "followers": 62000,
            "avg_views": 3100,
            "email": None,
            "avatar": None,
            "channel_id": None,
            "brand_fit_score": 70,
            "recent_content": ["strength training", "gym vlogs", "meal prep"],
        },
    ],
}


def seeds_for_category(category: str) -> List[Dict[str, Any]]:
    return [dict(s) for s in SEED_INFLUENCERS.get((category or "").lower(), [])]


def all_seeds() -> List[Dict[str, Any]]:
    return [dict(s) for seeds in SEED_INFLUENCERS.values() for s in seeds]


def insert_seeds(store: RecordStore, seeds: List[Dict[str, Any]]) -> List[Influencer]:
    """Dedup by name, then insert. Returns only the newly created rows."""
    created = []
    for data in seeds:
        if store.find_duplicate_influencer(None, data["name"]):
            continue
        inf = store.insert_influencer_if_new(data)
        if inf is not None:
            created.append(inf)
    logger.info("seeds_inserted", extra={"requested": len(seeds), "inserted": len(created)})
    return created
