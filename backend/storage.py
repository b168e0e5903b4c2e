"""
Record store: generic get/list/create/update over the SQLAlchemy models,
plus the handful of domain queries the routers and services need.

A missing row is a normal ``None`` result. Database faults are rolled back
and surfaced as StorageError.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Type
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from errors import StorageError
from logging_config import get_logger
from models import Brand, Campaign, Influencer, OutreachMessage, User

logger = get_logger("icy", component="storage")

DEFAULT_PAGE_SIZE = 50
DEFAULT_BRAND_FIT_SCORE = 75


class RecordStore:
    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Generic operations
    # ------------------------------------------------------------------
    def get(self, model: Type, record_id: UUID):
        try:
            return self.db.get(model, record_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load {model.__name__}: {e}") from e

    def list(self, model: Type, *criteria, order_by=None, limit: Optional[int] = None) -> List[Any]:
        try:
            q = self.db.query(model)
            if criteria:
                q = q.filter(*criteria)
            if order_by is not None:
                q = q.order_by(order_by)
            if limit is not None:
                q = q.limit(limit)
            return q.all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list {model.__name__}: {e}") from e

    def create(self, model: Type, **fields):
        obj = model(**fields)
        self.db.add(obj)
        self._commit(model)
        self.db.refresh(obj)
        return obj

    def update(self, model: Type, record_id: UUID, **fields):
        obj = self.get(model, record_id)
        if obj is None:
            return None
        for k, v in fields.items():
            setattr(obj, k, v)
        self._commit(model)
        self.db.refresh(obj)
        return obj

    def _commit(self, model: Type) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to save {model.__name__}: {e}") from e

    # ------------------------------------------------------------------
    # Users / brands / campaigns
    # ------------------------------------------------------------------
    def get_user_by_username(self, username: str) -> Optional[User]:
        rows = self.list(User, User.username == username, limit=1)
        return rows[0] if rows else None

    def brands_for_user(self, user_id: UUID) -> List[Brand]:
        return self.list(Brand, Brand.user_id == user_id, order_by=Brand.created_at.desc())

    def campaigns_for_user(self, user_id: UUID) -> List[Campaign]:
        return self.list(Campaign, Campaign.user_id == user_id, order_by=Campaign.created_at.desc())

    # ------------------------------------------------------------------
    # Influencers
    # ------------------------------------------------------------------
    def list_influencers(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        category: Optional[str] = None,
        platform: Optional[str] = None,
        min_followers: Optional[int] = None,
        max_followers: Optional[int] = None,
    ) -> List[Influencer]:
        criteria = []
        if category:
            criteria.append(Influencer.category == category)
        if platform:
            criteria.append(Influencer.platform == platform)
        if min_followers is not None:
            criteria.append(Influencer.followers >= min_followers)
        if max_followers is not None:
            criteria.append(Influencer.followers < max_followers)
        return self.list(Influencer, *criteria, order_by=Influencer.followers.desc(), limit=limit)

    def find_duplicate_influencer(self, channel_id: Optional[str], name: Optional[str]) -> Optional[Influencer]:
        """Indexed lookup on the dedup key: channel id first, then name."""
        if channel_id:
            rows = self.list(Influencer, Influencer.channel_id == channel_id, limit=1)
            if rows:
                return rows[0]
        if name:
            rows = self.list(Influencer, Influencer.name == name, limit=1)
            if rows:
                return rows[0]
        return None

    def create_influencer(self, fields: Dict[str, Any]) -> Influencer:
        data = dict(fields)
        if data.get("brand_fit_score") is None:
            data["brand_fit_score"] = DEFAULT_BRAND_FIT_SCORE
        return self.create(Influencer, **data)

    def insert_influencer_if_new(self, fields: Dict[str, Any]) -> Optional[Influencer]:
        """
        Returns the stored influencer, or None when the dedup key already
        exists. A concurrent insert that wins the race trips the unique
        constraints and is treated the same way.
        """
        if self.find_duplicate_influencer(fields.get("channel_id"), fields.get("name")):
            return None
        try:
            return self.create_influencer(fields)
        except IntegrityError:
            logger.info(
                "influencer_duplicate_on_insert",
                extra={"influencer_name": fields.get("name"), "channel_id": fields.get("channel_id")},
            )
            return None

    # ------------------------------------------------------------------
    # Outreach messages
    # ------------------------------------------------------------------
    def messages_for_influencer(self, influencer_id: UUID) -> List[OutreachMessage]:
        return self.list(
            OutreachMessage,
            OutreachMessage.influencer_id == influencer_id,
            order_by=OutreachMessage.created_at.desc(),
        )

    def mark_message_sent(
        self,
        message_id: UUID,
        sent_at: datetime,
        email_used: str,
        subject: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[OutreachMessage]:
        fields: Dict[str, Any] = {"status": "sent", "sent_at": sent_at, "email_used": email_used}
        if subject is not None:
            fields["subject"] = subject
        if content is not None:
            fields["content"] = content
        return self.update(OutreachMessage, message_id, **fields)
