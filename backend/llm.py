import os
import hashlib
from typing import Any, Callable, Dict, List, Optional

from config import DEFAULT_BRAND_NAME, GEMINI_MODEL, OPENAI_MODEL
from errors import GenerationError
from logging_config import get_logger

logger = get_logger("icy", component="llm")

CompleteFn = Callable[[str], str]

MAX_PROMPT_THEMES = 5
SUBJECT_MAX_CHARS = 50
DEFAULT_BRAND_FIT = 75


def _stable_tag(*parts: str) -> str:
    raw = "|".join([p or "" for p in parts])
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:8]


def llm_mode() -> str:
    """
    mock (default) | openai | gemini

    Falls back to mock when the selected provider has no key, so the app
    can start without credentials during development.
    """
    mode = os.getenv("LLM_MODE", "mock").lower().strip()
    if mode == "openai" and os.getenv("OPENAI_API_KEY"):
        return "openai"
    if mode == "gemini" and os.getenv("GEMINI_API_KEY"):
        return "gemini"
    return "mock"


def complete(prompt: str) -> str:
    """Send a prompt to the configured provider and return its text."""
    mode = llm_mode()

    if mode == "openai":
        # Lazy import so app can start without the openai package/key during development.
        from openai import OpenAI

        client = OpenAI()
        resp = client.responses.create(
            model=OPENAI_MODEL,
            input=prompt,
        )
        return (resp.output_text or "").strip()

    if mode == "gemini":
        from google import genai

        client = genai.Client(api_key=os.getenv("GEMINI_API_KEY"))
        resp = client.models.generate_content(
            model=GEMINI_MODEL,
            contents=prompt,
        )
        return (resp.text or "").strip()

    raise GenerationError("Generative text", "no provider configured (LLM_MODE=mock)")


# ----------------------------
# Prompts
# ----------------------------
def build_outreach_prompt(
    influencer: Dict[str, Any],
    brand_name: Optional[str] = None,
    brand_description: Optional[str] = None,
    max_themes: int = MAX_PROMPT_THEMES,
) -> str:
    category = influencer.get("category") or "lifestyle"
    platform = influencer.get("platform") or "youtube"
    themes: List[str] = list(influencer.get("recent_content") or [])[:max_themes]

    lines = [
        "You are an expert influencer outreach specialist. Generate a personalized, "
        "professional outreach email that:",
        "",
        "1. Addresses the influencer by name",
        "2. Shows genuine knowledge of their content and niche",
        "3. Proposes a collaboration that aligns with their audience",
        "4. Maintains a professional yet friendly tone",
        "5. Includes a single, clear call-to-action",
        "6. Is concise but compelling (200-300 words)",
        "",
        "Key guidelines:",
        "- Be authentic and avoid generic language",
        f"- Reference their specific content area ({category})",
        f"- Mention their platform ({platform})",
        "- Propose value for both the influencer and their community",
        "- Use a professional email format with greeting and signature",
        "",
        "Generate a personalized outreach message for:",
        "",
        f"Influencer: {influencer.get('name')} ({influencer.get('handle')})",
        f"Category: {category}",
        f"Platform: {platform}",
    ]
    if themes:
        lines.append(f"Recent content themes: {', '.join(themes)}")
    lines.append(f"Brand: {brand_name or DEFAULT_BRAND_NAME}")
    if brand_description:
        lines.append(f"Brand description: {brand_description}")
    lines += [
        "",
        "Create a compelling outreach message that demonstrates knowledge of their "
        "work and proposes a meaningful collaboration opportunity.",
    ]
    return "\n".join(lines)


def build_subject_prompt(influencer_name: str, category: str) -> str:
    return f"""
Generate a compelling email subject line for an influencer outreach email to {influencer_name} who creates {category} content. The subject should be:
- Professional yet engaging
- Personalized to the influencer
- Clear about collaboration intent
- Under {SUBJECT_MAX_CHARS} characters
- Free of spam trigger words

Return only the subject line, nothing else.
""".strip()


def build_brand_fit_prompt(influencer: Dict[str, Any], brand_description: Optional[str] = None) -> str:
    brand = brand_description or "General technology/lifestyle brand"
    return f"""
Analyze the brand fit between an influencer and a brand. Rate from 1-100 based on:
- Content alignment
- Audience match
- Brand safety
- Engagement quality

Influencer: {influencer.get('name')}
Category: {influencer.get('category')}
Platform: {influencer.get('platform')}
Followers: {influencer.get('followers')}
Brand: {brand}

Respond with only a number from 1-100.
""".strip()


def fallback_subject(influencer_name: str) -> str:
    return f"Collaboration Opportunity - {influencer_name}"


def _mock_outreach(influencer: Dict[str, Any], brand_name: Optional[str], brand_description: Optional[str]) -> str:
    brand = brand_name or DEFAULT_BRAND_NAME
    name = influencer.get("name") or influencer.get("handle") or "there"
    platform = influencer.get("platform") or "social"
    category = influencer.get("category") or "lifestyle"
    themes = list(influencer.get("recent_content") or [])[:MAX_PROMPT_THEMES]

    tag = _stable_tag(brand, name, platform, category)

    first_line = (
        f"I came across your {category} content on {platform} and really enjoyed it."
        if not themes else
        f"I came across your {platform} channel and loved your {', '.join(themes[:2])}."
    )

    body_lines = [
        f"Hi {name},",
        "",
        first_line,
        f"I'm reaching out from {brand}.",
        *([brand_description] if brand_description else []),
        "",
        f"We think your {category} audience would be a great match and would love to explore a collaboration.",
        "Would you be open to a quick call next week to talk through ideas?",
        "",
        "Best regards,",
        f"{brand} Team",
        f"[ref {tag}]",
    ]

    return "\n".join(body_lines).strip()


# ----------------------------
# Generation entry points
# ----------------------------
def generate_outreach_message(
    *,
    influencer: Dict[str, Any],
    brand_name: Optional[str] = None,
    brand_description: Optional[str] = None,
    complete_fn: Optional[CompleteFn] = None,
) -> str:
    """
    Returns the email body. Raises GenerationError when the provider fails
    or returns no text.

    ``complete_fn`` overrides the configured provider (tests inject a
    recorder here).
    """
    if complete_fn is None and llm_mode() == "mock":
        return _mock_outreach(influencer, brand_name, brand_description)

    prompt = build_outreach_prompt(influencer, brand_name, brand_description)
    fn = complete_fn or complete
    try:
        text = (fn(prompt) or "").strip()
    except GenerationError:
        raise
    except Exception as e:
        logger.error("outreach_generation_failed", extra={"error": str(e)})
        raise GenerationError("Generative text", str(e)) from e

    if not text:
        raise GenerationError("Generative text", "empty response")
    return text


def generate_subject_line(
    *,
    influencer_name: str,
    category: str,
    complete_fn: Optional[CompleteFn] = None,
) -> str:
    """Never raises: any failure degrades to the fixed template."""
    if complete_fn is None and llm_mode() == "mock":
        return f"Collab idea for {influencer_name}"

    fn = complete_fn or complete
    try:
        text = (fn(build_subject_prompt(influencer_name, category)) or "").strip()
    except Exception as e:
        logger.warning("subject_generation_failed", extra={"error": str(e)})
        return fallback_subject(influencer_name)

    text = text.splitlines()[0].strip().strip('"').strip() if text else ""
    if not text or len(text) > SUBJECT_MAX_CHARS:
        return fallback_subject(influencer_name)
    return text


def analyze_brand_fit(
    *,
    influencer: Dict[str, Any],
    brand_description: Optional[str] = None,
    complete_fn: Optional[CompleteFn] = None,
) -> int:
    """1-100 rating from the provider; DEFAULT_BRAND_FIT on any failure."""
    fn = complete_fn or complete
    try:
        text = (fn(build_brand_fit_prompt(influencer, brand_description)) or "").strip()
        score = int(text.split()[0].rstrip(".,")) if text else DEFAULT_BRAND_FIT
    except Exception as e:
        logger.warning("brand_fit_analysis_failed", extra={"error": str(e)})
        return DEFAULT_BRAND_FIT
    return min(max(score, 1), 100)
