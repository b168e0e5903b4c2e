import random
from types import SimpleNamespace

import pytest

from conftest import FakeYouTube, make_channel
from discovery import (
    CATEGORY_QUERIES,
    DEFAULT_QUERIES,
    InfluencerDiscovery,
    channel_to_candidate,
    classify_category,
    derive_handle,
    queries_for_category,
)
from errors import ProviderError
from models import Influencer
from scoring import get_brand_fit_scorer, random_brand_fit_score
from youtube import YouTubeClient


def fixed_score(candidate):
    return 80


def no_pause(seconds):
    pass


def make_discovery(store, client):
    return InfluencerDiscovery(store, client, scorer=fixed_score, pause=no_pause)


class TestClassification:
    def test_ai_title_with_programming_description_is_tech(self):
        assert classify_category("Top 10 AI Tools", "programming") == "tech"

    def test_first_matching_category_wins(self):
        # "review" (tech) is checked before "makeup" (beauty)
        assert classify_category("Makeup Review", "") == "tech"

    def test_beauty(self):
        assert classify_category("Makeup by Mona", "skincare for everyone") == "beauty"

    def test_no_keyword_falls_back_to_lifestyle(self):
        assert classify_category("Bob", None) == "lifestyle"

    def test_handle_prefers_custom_url(self):
        assert derive_handle("Alex Chen", "@alextech") == "@alextech"
        assert derive_handle("Alex Chen", "alextech") == "@alextech"

    def test_handle_from_title(self):
        assert derive_handle("Alex  Chen Tech") == "@alexchentech"

    def test_unknown_category_uses_default_queries(self):
        assert queries_for_category("knitting") == DEFAULT_QUERIES
        assert queries_for_category("TECH") == CATEGORY_QUERIES["tech"]


class TestChannelToCandidate:
    def test_below_subscriber_floor_is_discarded(self):
        channel = make_channel("UC1", "Tiny Tech", 500)
        assert channel_to_candidate(channel, fixed_score) is None

    def test_floor_is_inclusive(self):
        channel = make_channel("UC1", "Small Tech", 1000)
        assert channel_to_candidate(channel, fixed_score) is not None

    def test_fields(self):
        channel = make_channel("UC42", "Top 10 AI Tools", 200_000, "programming", custom_url="@top10ai")
        c = channel_to_candidate(channel, fixed_score)

        assert c["name"] == "Top 10 AI Tools"
        assert c["handle"] == "@top10ai"
        assert c["platform"] == "youtube"
        assert c["category"] == "tech"
        assert c["followers"] == 200_000
        assert c["avg_views"] == 10_000
        assert c["email"] is None
        assert c["channel_id"] == "UC42"
        assert c["avatar"] == "https://yt.example/UC42/high.jpg"
        assert c["brand_fit_score"] == 80
        assert "product reviews" in c["recent_content"]

    def test_missing_statistics_counts_as_zero(self):
        channel = make_channel("UC1", "Hidden", 0)
        channel["statistics"] = {"hiddenSubscriberCount": True}
        assert channel_to_candidate(channel, fixed_score) is None


class TestScoring:
    def test_random_score_in_range(self):
        rng = random.Random(7)
        scores = [random_brand_fit_score({}, rng=rng) for _ in range(200)]
        assert min(scores) >= 60
        assert max(scores) <= 100

    def test_unknown_scorer_rejected(self):
        with pytest.raises(RuntimeError):
            get_brand_fit_scorer("astrology")

    def test_named_scorer(self):
        assert get_brand_fit_scorer("random") is random_brand_fit_score


class TestSearchByQuery:
    def test_without_client_raises_provider_error(self, store):
        with pytest.raises(ProviderError):
            make_discovery(store, None).search_by_query("tech review")

    def test_keeps_only_channels_over_floor(self, store):
        yt = FakeYouTube({"ai": [
            make_channel("UC1", "Big AI", 50_000),
            make_channel("UC2", "Small AI", 500),
        ]})
        candidates = make_discovery(store, yt).search_by_query("ai", 10)
        assert [c["channel_id"] for c in candidates] == ["UC1"]

    def test_max_results_clamped(self, store):
        yt = FakeYouTube()
        make_discovery(store, yt).search_by_query("ai", 500)
        assert yt.searches == [("ai", 50)]

    def test_no_hits(self, store):
        assert make_discovery(store, FakeYouTube()).search_by_query("nothing") == []


class TestSaveCandidates:
    def test_skips_existing_records(self, store, influencer):
        yt = FakeYouTube({"q": [
            make_channel("UCtech123", "Alex Chen Renamed", 300_000),
            make_channel("UCnew", "Fresh Tech", 10_000),
        ]})
        d = make_discovery(store, yt)
        saved = d.save_candidates(d.search_by_query("q"))

        assert [s.channel_id for s in saved] == ["UCnew"]
        assert len(store.list(Influencer)) == 2

    def test_one_bad_candidate_does_not_stop_the_rest(self, store):
        d = make_discovery(store, FakeYouTube())
        bad = {"name": "Broken", "handle": "@broken", "platform": "youtube", "category": "tech",
               "followers": 5000, "no_such_column": 1}
        good = {"name": "Good", "handle": "@good", "platform": "youtube", "category": "tech",
                "followers": 5000, "channel_id": "UCgood"}

        saved = d.save_candidates([bad, good])
        assert [s.name for s in saved] == ["Good"]


class TestDiscoverByCategory:
    def test_same_channel_across_phrases_stored_once(self, store):
        shared = make_channel("UCshared", "Gadget Review Hub", 80_000)
        yt = FakeYouTube({"tech review": [shared], "gadget review": [shared]})

        make_discovery(store, yt).discover_by_category("tech", 10)

        rows = store.list(Influencer, Influencer.channel_id == "UCshared")
        assert len(rows) == 1

    def test_splits_target_across_phrases(self, store):
        yt = FakeYouTube()
        make_discovery(store, yt).discover_by_category("tech", 11)

        assert [q for q, _ in yt.searches] == CATEGORY_QUERIES["tech"]
        assert {n for _, n in yt.searches} == {3}

    def test_failed_phrase_does_not_abort_the_rest(self, store):
        yt = FakeYouTube(
            {"makeup tutorial": [make_channel("UCmk", "Makeup by Mona", 40_000)],
             "cosmetics": [make_channel("UCcos", "Cosmetics Corner", 60_000)]},
            failing_queries={"beauty channel", "skincare routine"},
        )
        make_discovery(store, yt).discover_by_category("beauty", 10)

        assert {i.channel_id for i in store.list(Influencer)} == {"UCmk", "UCcos"}
        assert len(yt.searches) == 5

    def test_all_phrases_failing_raises(self, store):
        with pytest.raises(ProviderError):
            make_discovery(store, FakeYouTube(fail_all=True)).discover_by_category("tech", 10)

    def test_pauses_between_phrases(self, store):
        pauses = []
        d = InfluencerDiscovery(store, FakeYouTube(), scorer=fixed_score, pause=pauses.append)
        d.discover_by_category("knitting", 3)
        assert len(pauses) == len(DEFAULT_QUERIES)

    def test_garbled_reply_for_one_phrase_does_not_stop_the_batch(self, store):
        channels = {"UCrev": make_channel("UCrev", "Tech Review Lab", 70_000)}

        class Session:
            def __init__(self):
                self.queries = []

            def get(self, url, params=None, timeout=None):
                if url.endswith("/channels"):
                    ids = params["id"].split(",")
                    return SimpleNamespace(status_code=200, text="",
                                           json=lambda: {"items": [channels[i] for i in ids]})
                self.queries.append(params["q"])
                if params["q"] == "technology channel":
                    def garbled():
                        raise ValueError("Expecting value: line 1 column 1 (char 0)")
                    return SimpleNamespace(status_code=200, text="<html>proxy</html>", json=garbled)
                hits = [{"id": {"channelId": "UCrev"}}] if params["q"] == "tech review" else []
                return SimpleNamespace(status_code=200, text="", json=lambda: {"items": hits})

        session = Session()
        client = YouTubeClient(api_key="yt-key", session=session)
        make_discovery(store, client).discover_by_category("tech", 10)

        assert session.queries == CATEGORY_QUERIES["tech"]
        assert [i.channel_id for i in store.list(Influencer)] == ["UCrev"]
