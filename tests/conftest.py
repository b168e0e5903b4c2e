"""
Shared pytest fixtures: in-memory SQLite, and fakes for the three external
providers (YouTube search, generative text, email delivery).
"""
import os

# Must be set before any app module reads its configuration.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LLM_MODE"] = "mock"
os.environ.pop("YOUTUBE_API_KEY", None)
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("OUTREACH_DRY_RUN", None)

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

import models  # noqa: F401  (registers tables)
from db import Base, SessionLocal, engine
from deps import get_complete_fn, get_discovery, get_sender_provider, get_store
from discovery import InfluencerDiscovery
from email_providers.base import SendEmailResult
from errors import DeliveryError, ProviderError
from models import User
from storage import RecordStore


def make_channel(channel_id, title, subscribers, description="", custom_url=None):
    snippet = {
        "title": title,
        "description": description,
        "thumbnails": {
            "default": {"url": f"https://yt.example/{channel_id}/default.jpg"},
            "high": {"url": f"https://yt.example/{channel_id}/high.jpg"},
        },
    }
    if custom_url:
        snippet["customUrl"] = custom_url
    return {
        "id": channel_id,
        "snippet": snippet,
        "statistics": {"subscriberCount": str(subscribers), "videoCount": "10", "viewCount": "1000"},
    }


class FakeYouTube:
    """search_channel_ids/get_channels backed by a query -> channels map."""

    def __init__(self, results=None, failing_queries=(), fail_all=False):
        self.results = results or {}
        self.failing_queries = set(failing_queries)
        self.fail_all = fail_all
        self.searches = []
        self._channels = {}

    def search_channel_ids(self, query, max_results):
        self.searches.append((query, max_results))
        if self.fail_all or query in self.failing_queries:
            raise ProviderError("YouTube", f"403 - quota exceeded for '{query}'")
        channels = self.results.get(query, [])[:max_results]
        for ch in channels:
            self._channels[ch["id"]] = ch
        return [ch["id"] for ch in channels]

    def get_channels(self, channel_ids):
        return [self._channels[cid] for cid in channel_ids]


class RecordingComplete:
    """Completion double: records every prompt, answers body/subject prompts."""

    def __init__(self, body="Hi there,\n\nLet's work together.\n\nBest,\nTeam", subject="Let's collaborate",
                 fail_subject=False):
        self.prompts = []
        self.body = body
        self.subject = subject
        self.fail_subject = fail_subject

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if "subject line" in prompt:
            if self.fail_subject:
                raise RuntimeError("provider timeout")
            return self.subject
        return self.body


class FakeEmailProvider:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send_email(self, req):
        if self.fail:
            raise DeliveryError("SendGrid error 403: sender not verified")
        self.sent.append(req)
        return SendEmailResult(provider="fake", provider_msg_id=f"fake-{len(self.sent)}", dry_run=False)


@pytest.fixture
def db_session():
    Base.metadata.create_all(engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def store(db_session):
    return RecordStore(db_session)


@pytest.fixture
def user(store):
    return store.create(User, username="marketer", password="secret", email="marketer@acme.io")


@pytest.fixture
def influencer(store):
    return store.create_influencer({
        "name": "Alex Chen",
        "handle": "@alextech",
        "platform": "youtube",
        "category": "tech",
        "followers": 245000,
        "avg_views": 12250,
        "email": "alex@techreview.com",
        "channel_id": "UCtech123",
        "brand_fit_score": 87,
        "recent_content": ["AI innovations", "smartphone reviews", "tech tutorials"],
    })


def add_influencer(store, name, followers, **fields):
    data = {
        "name": name,
        "handle": "@" + name.replace(" ", "").lower(),
        "platform": "youtube",
        "category": "tech",
        "followers": followers,
    }
    data.update(fields)
    return store.create_influencer(data)


@pytest.fixture
def fake_youtube():
    return FakeYouTube()


@pytest.fixture
def fake_complete():
    return RecordingComplete()


@pytest.fixture
def fake_email():
    return FakeEmailProvider()


@pytest.fixture
def client(db_session, fake_youtube, fake_complete, fake_email):
    from main import app

    def discovery_override(store: RecordStore = Depends(get_store)):
        return InfluencerDiscovery(store, fake_youtube, pause=lambda seconds: None)

    app.dependency_overrides[get_discovery] = discovery_override
    app.dependency_overrides[get_complete_fn] = lambda: fake_complete
    app.dependency_overrides[get_sender_provider] = lambda: fake_email

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
