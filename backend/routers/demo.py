# Demo-only endpoints: a fixed test user and the seed influencers.
from fastapi import APIRouter, Depends

from deps import get_store
from models import User
from schemas import DemoPopulateResult, DemoUserResult, InfluencerOut
from seeds import all_seeds, insert_seeds
from storage import RecordStore

router = APIRouter(prefix="/demo", tags=["demo"])

DEMO_USERNAME = "testuser"


@router.post("/create-user", response_model=DemoUserResult)
def create_demo_user(store: RecordStore = Depends(get_store)):
    existing = store.get_user_by_username(DEMO_USERNAME)
    if existing:
        return DemoUserResult(success=True, message="Test user already exists", user_id=existing.id)

    user = store.create(User, username=DEMO_USERNAME, password="password", email="test@example.com")
    return DemoUserResult(success=True, message="Test user created", user_id=user.id)


@router.post("/populate-influencers", response_model=DemoPopulateResult)
def populate_demo_influencers(store: RecordStore = Depends(get_store)):
    created = insert_seeds(store, all_seeds())
    return DemoPopulateResult(
        success=True,
        message=f"Created {len(created)} demo influencers",
        influencers=[InfluencerOut.model_validate(inf) for inf in created],
    )
