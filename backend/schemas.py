from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional, List, Literal
from uuid import UUID
from datetime import datetime

from config import OUTREACH_FROM_EMAIL


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case accepted on input too
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _required_text(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("must not be empty")
    return v


RequiredText = Annotated[str, AfterValidator(_required_text)]


# ---------- Users / Brands / Campaigns ----------
class UserOut(CamelModel):
    id: UUID
    username: str
    email: Optional[str] = None
    created_at: datetime


class BrandCreate(CamelModel):
    name: RequiredText
    description: Optional[str] = None
    target_audience: Optional[str] = None
    website: Optional[str] = None
    user_id: UUID


class BrandOut(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    target_audience: Optional[str] = None
    website: Optional[str] = None
    user_id: UUID
    created_at: datetime


class CampaignCreate(CamelModel):
    name: RequiredText
    description: Optional[str] = None
    status: Literal["active", "paused", "completed"] = "active"
    brand_id: UUID
    user_id: UUID


class CampaignOut(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    status: str
    brand_id: UUID
    user_id: UUID
    created_at: datetime


# ---------- Influencers ----------
class InfluencerOut(CamelModel):
    id: UUID
    name: str
    handle: str
    platform: str
    category: str
    followers: int
    avg_views: Optional[int] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
    channel_id: Optional[str] = None
    brand_fit_score: Optional[int] = None
    recent_content: List[str] = []
    created_at: datetime

    @field_validator("recent_content", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or []


class InfluencerUpdate(CamelModel):
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None
    category: Optional[RequiredText] = None
    brand_fit_score: Optional[int] = Field(default=None, ge=1, le=100)
    recent_content: Optional[List[str]] = None

    @model_validator(mode="after")
    def category_not_cleared(self):
        # omitted means unchanged; the column itself is NOT NULL
        if "category" in self.model_fields_set and self.category is None:
            raise ValueError("category cannot be null")
        return self


class InfluencerSummary(CamelModel):
    id: UUID
    name: str
    handle: str
    category: str
    email: Optional[str] = None
    avatar: Optional[str] = None


# ---------- Discovery ----------
class DiscoverRequest(CamelModel):
    category: RequiredText
    count: int = Field(default=50, ge=1, le=500)


class SearchYouTubeRequest(CamelModel):
    query: RequiredText
    max_results: int = Field(default=20, ge=1, le=50)


class DiscoverResult(CamelModel):
    success: bool
    message: str


class SearchResult(CamelModel):
    success: bool
    message: str
    influencers: List[InfluencerOut]


# ---------- Messages ----------
class GenerateMessageRequest(CamelModel):
    influencer_id: UUID
    brand_name: Optional[str] = None
    brand_description: Optional[str] = None
    user_id: Optional[UUID] = None
    campaign_id: Optional[UUID] = None


class GenerateMessageResponse(CamelModel):
    message_id: UUID
    subject: str
    content: str
    influencer: InfluencerSummary


class SendMessageRequest(CamelModel):
    message_id: UUID
    to_email: EmailStr
    from_email: EmailStr = OUTREACH_FROM_EMAIL
    # edited draft text; persisted only when the send succeeds
    subject: Optional[str] = None
    content: Optional[str] = None


class SendMessageResponse(CamelModel):
    success: bool
    message: str
    sent_to: str


class MessageOut(CamelModel):
    id: UUID
    subject: str
    content: str
    influencer_id: UUID
    campaign_id: Optional[UUID] = None
    user_id: UUID
    status: str
    sent_at: Optional[datetime] = None
    email_used: Optional[str] = None
    ai_generated: bool
    created_at: datetime


# ---------- Demo ----------
class DemoUserResult(CamelModel):
    success: bool
    message: str
    user_id: UUID


class DemoPopulateResult(CamelModel):
    success: bool
    message: str
    influencers: List[InfluencerOut]
