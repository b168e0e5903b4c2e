import uuid
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from conftest import add_influencer
from models import Influencer, OutreachMessage
from storage import DEFAULT_BRAND_FIT_SCORE


class TestGenericOperations:
    def test_get_missing_returns_none(self, store):
        assert store.get(Influencer, uuid.uuid4()) is None

    def test_update_missing_returns_none(self, store):
        assert store.update(Influencer, uuid.uuid4(), email="x@example.com") is None

    def test_update_changes_only_given_fields(self, store, influencer):
        updated = store.update(Influencer, influencer.id, email="new@techreview.com")
        assert updated.email == "new@techreview.com"
        assert updated.followers == 245000

    def test_create_assigns_id_and_timestamp(self, store):
        inf = add_influencer(store, "Nova", 1200)
        assert isinstance(inf.id, uuid.UUID)
        assert inf.created_at is not None


class TestListInfluencers:
    def test_sorted_by_followers_descending(self, store):
        for name, followers in [("Small", 2_000), ("Huge", 2_000_000), ("Mid", 45_000)]:
            add_influencer(store, name, followers)

        rows = store.list_influencers()
        assert [r.name for r in rows] == ["Huge", "Mid", "Small"]

    def test_default_limit_is_50(self, store):
        for i in range(55):
            add_influencer(store, f"Creator {i}", 1_000 + i)

        rows = store.list_influencers()
        assert len(rows) == 50
        assert rows[0].followers == 1_054

    def test_filters(self, store):
        add_influencer(store, "Tech Big", 500_000)
        add_influencer(store, "Tech Small", 5_000)
        add_influencer(store, "Beauty Big", 600_000, category="beauty")
        add_influencer(store, "Insta Tech", 300_000, platform="instagram")

        rows = store.list_influencers(category="tech", platform="youtube", min_followers=100_000)
        assert [r.name for r in rows] == ["Tech Big"]

    def test_max_followers_is_exclusive(self, store):
        add_influencer(store, "Edge", 100_000)
        add_influencer(store, "Under", 99_999)

        rows = store.list_influencers(min_followers=10_000, max_followers=100_000)
        assert [r.name for r in rows] == ["Under"]


class TestInfluencerDedup:
    def test_brand_fit_defaults_to_75(self, store):
        inf = add_influencer(store, "Plain", 3_000)
        assert inf.brand_fit_score == DEFAULT_BRAND_FIT_SCORE == 75

    def test_duplicate_by_channel_id(self, store, influencer):
        assert store.insert_influencer_if_new({
            "name": "Someone Else", "handle": "@else", "platform": "youtube",
            "category": "tech", "followers": 10, "channel_id": "UCtech123",
        }) is None

    def test_duplicate_by_name(self, store, influencer):
        assert store.insert_influencer_if_new({
            "name": "Alex Chen", "handle": "@other", "platform": "instagram",
            "category": "tech", "followers": 10,
        }) is None

    def test_lost_race_is_reported_as_duplicate(self, store, influencer, monkeypatch):
        # the pre-check misses, the unique constraint catches it
        monkeypatch.setattr(store, "find_duplicate_influencer", lambda channel_id, name: None)

        result = store.insert_influencer_if_new({
            "name": "Alex Chen", "handle": "@alextech", "platform": "youtube",
            "category": "tech", "followers": 245000, "channel_id": "UCtech123",
        })
        assert result is None
        assert len(store.list(Influencer)) == 1

    def test_unique_name_enforced(self, store, influencer):
        with pytest.raises(IntegrityError):
            add_influencer(store, "Alex Chen", 5)
        # session is usable again after the rollback
        assert store.get(Influencer, influencer.id).name == "Alex Chen"


class TestMessages:
    def _message(self, store, influencer, user, **fields):
        data = {
            "subject": "Hello",
            "content": "Body",
            "influencer_id": influencer.id,
            "user_id": user.id,
        }
        data.update(fields)
        return store.create(OutreachMessage, **data)

    def test_defaults(self, store, influencer, user):
        msg = self._message(store, influencer, user)
        assert msg.status == "draft"
        assert msg.ai_generated is True
        assert msg.sent_at is None

    def test_messages_newest_first(self, store, influencer, user):
        now = datetime.utcnow()
        older = self._message(store, influencer, user, subject="older", created_at=now - timedelta(hours=1))
        newer = self._message(store, influencer, user, subject="newer", created_at=now)

        rows = store.messages_for_influencer(influencer.id)
        assert [m.id for m in rows] == [newer.id, older.id]

    def test_mark_sent_keeps_text_unless_edited(self, store, influencer, user):
        msg = self._message(store, influencer, user)
        sent_at = datetime.utcnow()

        updated = store.mark_message_sent(msg.id, sent_at, "alex@techreview.com")
        assert updated.status == "sent"
        assert updated.sent_at == sent_at
        assert updated.email_used == "alex@techreview.com"
        assert updated.subject == "Hello"

    def test_mark_sent_with_edits(self, store, influencer, user):
        msg = self._message(store, influencer, user)
        updated = store.mark_message_sent(msg.id, datetime.utcnow(), "a@b.co", subject="Edited", content="New")
        assert (updated.subject, updated.content) == ("Edited", "New")
