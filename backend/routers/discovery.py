from fastapi import APIRouter, Depends

from deps import get_discovery, get_store
from discovery import InfluencerDiscovery
from errors import ProviderError
from logging_config import get_logger
from schemas import DiscoverRequest, DiscoverResult, InfluencerOut, SearchResult, SearchYouTubeRequest
from seeds import insert_seeds, seeds_for_category
from storage import RecordStore

logger = get_logger("icy", component="api")

router = APIRouter()


@router.post("/discover-influencers", response_model=DiscoverResult)
def discover_influencers(
    payload: DiscoverRequest,
    discovery: InfluencerDiscovery = Depends(get_discovery),
    store: RecordStore = Depends(get_store),
):
    """
    Runs YouTube discovery for a category. Inserts happen before the
    response; clients still treat this as fire-and-refresh.

    When YouTube is unavailable the fixed seed list is used instead
    (tech, beauty and fitness only).
    """
    try:
        discovery.discover_by_category(payload.category, payload.count)
    except ProviderError as e:
        seeds = seeds_for_category(payload.category)
        created = insert_seeds(store, seeds)
        logger.warning(
            "discovery_fallback_to_seeds",
            extra={"category": payload.category, "error": e.message, "seeded": len(created)},
        )

    return DiscoverResult(
        success=True,
        message=f"Started discovering {payload.count} {payload.category} influencers from YouTube",
    )


@router.post("/search-youtube", response_model=SearchResult)
def search_youtube(payload: SearchYouTubeRequest, discovery: InfluencerDiscovery = Depends(get_discovery)):
    # ProviderError propagates -> 500
    candidates = discovery.search_by_query(payload.query, payload.max_results)
    saved = discovery.save_candidates(candidates)
    return SearchResult(
        success=True,
        message=f"Found and saved {len(saved)} new influencers",
        influencers=[InfluencerOut.model_validate(inf) for inf in saved],
    )
