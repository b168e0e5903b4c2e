"""
FastAPI dependencies shared across routers. Tests swap the provider-facing
ones (search client, completion function, email provider) through
app.dependency_overrides.
"""
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from db import get_db
from discovery import InfluencerDiscovery
from email_providers.base import EmailProvider
from email_providers.factory import get_email_provider
from errors import ProviderConfigError
from llm import CompleteFn
from logging_config import get_logger
from outreach import MessageGenerator, OutreachSender
from scoring import get_brand_fit_scorer
from storage import RecordStore
from youtube import YouTubeClient

logger = get_logger("icy", component="api")


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_search_client() -> Optional[YouTubeClient]:
    """None when YOUTUBE_API_KEY is missing; discovery then reports a provider failure."""
    try:
        return YouTubeClient()
    except ProviderConfigError as e:
        logger.error("YouTube search unavailable", extra={"error": e.message})
        return None


def get_complete_fn() -> Optional[CompleteFn]:
    # None -> llm module picks the provider from LLM_MODE
    return None


def get_discovery(
    store: RecordStore = Depends(get_store),
    client: Optional[YouTubeClient] = Depends(get_search_client),
) -> InfluencerDiscovery:
    return InfluencerDiscovery(store, client, scorer=get_brand_fit_scorer())


def get_generator(
    store: RecordStore = Depends(get_store),
    complete_fn: Optional[CompleteFn] = Depends(get_complete_fn),
) -> MessageGenerator:
    return MessageGenerator(store, complete_fn=complete_fn)


def get_sender_provider() -> EmailProvider:
    return get_email_provider()


def get_sender(
    store: RecordStore = Depends(get_store),
    provider: EmailProvider = Depends(get_sender_provider),
) -> OutreachSender:
    return OutreachSender(store, provider)
