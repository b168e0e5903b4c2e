from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError

from deps import get_store
from errors import ValidationError
from models import Influencer
from schemas import InfluencerOut, InfluencerUpdate, MessageOut
from storage import DEFAULT_PAGE_SIZE, RecordStore

router = APIRouter()

# UI follower buckets -> [min, max)
FOLLOWER_RANGES = {
    "1k-10k": (1_000, 10_000),
    "10k-100k": (10_000, 100_000),
    "100k-1m": (100_000, 1_000_000),
    "1m+": (1_000_000, None),
}


@router.get("", response_model=List[InfluencerOut])
def list_influencers(
    category: Optional[str] = None,
    platform: Optional[str] = None,
    followers: Optional[str] = None,   # 1k-10k | 10k-100k | 100k-1m | 1m+
    limit: int = DEFAULT_PAGE_SIZE,
    store: RecordStore = Depends(get_store),
):
    """
    Influencers ordered by follower count, largest first.

    Examples:
      /influencers?category=tech
      /influencers?platform=youtube&followers=10k-100k
      /influencers?limit=20
    """
    if limit < 1 or limit > 500:
        raise HTTPException(status_code=400, detail="limit must be between 1 and 500")

    min_followers = max_followers = None
    if followers and followers != "all":
        if followers not in FOLLOWER_RANGES:
            raise HTTPException(
                status_code=400,
                detail=f"followers must be one of: {', '.join(FOLLOWER_RANGES)}",
            )
        min_followers, max_followers = FOLLOWER_RANGES[followers]

    return store.list_influencers(
        limit=limit,
        category=None if category == "all" else category,
        platform=None if platform == "all" else platform,
        min_followers=min_followers,
        max_followers=max_followers,
    )


@router.get("/{influencer_id}", response_model=InfluencerOut)
def get_influencer(influencer_id: UUID, store: RecordStore = Depends(get_store)):
    inf = store.get(Influencer, influencer_id)
    if not inf:
        raise HTTPException(status_code=404, detail="Influencer not found")
    return inf


@router.patch("/{influencer_id}", response_model=InfluencerOut)
def update_influencer(influencer_id: UUID, payload: InfluencerUpdate, store: RecordStore = Depends(get_store)):
    try:
        inf = store.update(Influencer, influencer_id, **payload.model_dump(exclude_unset=True))
    except IntegrityError as e:
        raise ValidationError(f"Influencer update rejected: {e.orig}") from e
    if not inf:
        raise HTTPException(status_code=404, detail="Influencer not found")
    return inf


@router.get("/{influencer_id}/messages", response_model=List[MessageOut])
def list_messages_for_influencer(influencer_id: UUID, store: RecordStore = Depends(get_store)):
    # ensure influencer exists (helps with clearer errors)
    if not store.get(Influencer, influencer_id):
        raise HTTPException(status_code=404, detail="Influencer not found")
    return store.messages_for_influencer(influencer_id)
