from fastapi import APIRouter, Depends, HTTPException
from typing import List
from uuid import UUID

from deps import get_store
from models import Brand, Campaign, User
from schemas import BrandCreate, BrandOut, CampaignCreate, CampaignOut
from storage import RecordStore

router = APIRouter()


def _require_user(store: RecordStore, user_id: UUID) -> User:
    user = store.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# ----------------------------
# Brands
# ----------------------------
@router.post("/brands", response_model=BrandOut)
def create_brand(payload: BrandCreate, store: RecordStore = Depends(get_store)):
    _require_user(store, payload.user_id)
    return store.create(Brand, **payload.model_dump())


@router.get("/brands", response_model=List[BrandOut])
def list_brands(user_id: UUID, store: RecordStore = Depends(get_store)):
    _require_user(store, user_id)
    return store.brands_for_user(user_id)


# ----------------------------
# Campaigns
# ----------------------------
@router.post("/campaigns", response_model=CampaignOut)
def create_campaign(payload: CampaignCreate, store: RecordStore = Depends(get_store)):
    _require_user(store, payload.user_id)
    brand = store.get(Brand, payload.brand_id)
    if not brand:
        raise HTTPException(status_code=404, detail="Brand not found")
    return store.create(Campaign, **payload.model_dump())


@router.get("/campaigns", response_model=List[CampaignOut])
def list_campaigns(user_id: UUID, store: RecordStore = Depends(get_store)):
    _require_user(store, user_id)
    return store.campaigns_for_user(user_id)
