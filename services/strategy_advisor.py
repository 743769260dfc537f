# services/strategy_advisor.py

from google import genai

from core.config import settings
from core.logging_config import logger
from models.event import FutsalEvent


KEY_NOT_CONFIGURED_MESSAGE = "The AI API key is not configured. Please contact an administrator."
KEY_INVALID_MESSAGE = "The AI API key is invalid. Please check the configuration."
GENERIC_FAILURE_MESSAGE = "An error occurred while fetching AI advice."
NO_ADVICE_MESSAGE = "No advice could be generated."


def _api_key():
    key = settings.GEMINI_API_KEY
    if not key or key.strip() in ("", "undefined"):
        return None
    return key.strip()


def build_strategy_prompt(event: FutsalEvent, language: str = None) -> str:
    """
    Prompt for one event: who is coming and what kind of session it is.
    Only GOING answers count toward the head count.
    """
    language = language or settings.ADVISOR_LANGUAGE
    going = event.going_names()

    return f"""
Please give advice for a futsal team event.
Event: {event.title}
Location: {event.location}
Event type: {event.type.value}
Attendees: {len(going)}
Names: {", ".join(going)}

Based on the above, answer the following three points in {language}:
1. A recommended practice menu or match plan
2. A recommended substitution pace for this number of players
3. One line to raise the team's motivation
""".strip()


def get_team_strategy(event: FutsalEvent) -> str:
    """
    One generate_content call per request. Never raises: every failure
    becomes a user-facing message.
    """
    api_key = _api_key()
    if api_key is None:
        logger.error("Gemini API key is missing. Set GEMINI_API_KEY (or API_KEY).")
        return KEY_NOT_CONFIGURED_MESSAGE

    prompt = build_strategy_prompt(event)

    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt,
        )
        text = getattr(response, "text", None)
        return text if text else NO_ADVICE_MESSAGE

    except Exception as e:
        logger.error(f"Gemini API Error: {e}")
        if "API_KEY_INVALID" in str(e):
            return KEY_INVALID_MESSAGE
        return GENERIC_FAILURE_MESSAGE
