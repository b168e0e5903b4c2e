import uuid
from sqlalchemy import (
    Column, String, Integer, DateTime, Text, Boolean, ForeignKey, JSON, Uuid
)
from sqlalchemy.orm import relationship
from datetime import datetime
from db import Base

PLATFORMS = ("youtube", "instagram")
CAMPAIGN_STATUSES = ("active", "paused", "completed")

# Only draft -> sent is driven by this service; the rest wait for the
# SendGrid event webhook (see routers/webhooks_sendgrid.py).
MESSAGE_STATUSES = ("draft", "sent", "delivered", "opened", "replied")


class User(Base):
    __tablename__ = "users"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String, nullable=False, unique=True)
    password = Column(String, nullable=False)
    email = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Brand(Base):
    __tablename__ = "brands"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    target_audience = Column(Text, nullable=True)
    website = Column(String, nullable=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User")


class Influencer(Base):
    __tablename__ = "influencers"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # name and channel_id are the dedup key; both unique at the storage level
    name = Column(String, nullable=False, unique=True)
    handle = Column(String, nullable=False, index=True)
    platform = Column(String, nullable=False)  # youtube/instagram
    category = Column(String, nullable=False, index=True)
    followers = Column(Integer, nullable=False, default=0, index=True)
    avg_views = Column(Integer, nullable=True)
    email = Column(String, nullable=True)
    avatar = Column(String, nullable=True)
    channel_id = Column(String, nullable=True, unique=True)
    brand_fit_score = Column(Integer, nullable=True)  # 1-100
    recent_content = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    messages = relationship("OutreachMessage", back_populates="influencer")


class Campaign(Base):
    __tablename__ = "campaigns"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="active")  # active/paused/completed
    brand_id = Column(Uuid(as_uuid=True), ForeignKey("brands.id"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    brand = relationship("Brand")
    user = relationship("User")


class OutreachMessage(Base):
    __tablename__ = "outreach_messages"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    subject = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    influencer_id = Column(Uuid(as_uuid=True), ForeignKey("influencers.id"), nullable=False, index=True)
    campaign_id = Column(Uuid(as_uuid=True), ForeignKey("campaigns.id"), nullable=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    status = Column(String, nullable=False, default="draft")
    sent_at = Column(DateTime, nullable=True)
    email_used = Column(String, nullable=True)
    ai_generated = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    influencer = relationship("Influencer", back_populates="messages")
    campaign = relationship("Campaign")
