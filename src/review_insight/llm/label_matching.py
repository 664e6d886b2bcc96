"""
Best-effort mapping from normalized model output to display labels.

Model output is free text, so matching is a plain substring search in a
fixed order; the first keyword found wins. Text matching no keyword maps to
the UNKNOWN category, which is a normal result and not an error.
"""

from review_insight.models.enums import NounDensityEnum, SentimentEnum
from review_insight.models.inference_models import DisplayLabel

# Order matters: first match wins.
SENTIMENT_ICONS: list[tuple[SentimentEnum, str]] = [
    (SentimentEnum.POSITIVE, "👍"),
    (SentimentEnum.NEGATIVE, "👎"),
    (SentimentEnum.NEUTRAL, "❓"),
]
SENTIMENT_UNKNOWN_ICON = "❓"

NOUN_DENSITY_BADGES: list[tuple[NounDensityEnum, str]] = [
    (NounDensityEnum.HIGH, "🟢"),
    (NounDensityEnum.MEDIUM, "🟡"),
    (NounDensityEnum.LOW, "🔴"),
]
NOUN_DENSITY_UNKNOWN_BADGE = "—"

SCORE_THRESHOLD = 0.5


def match_sentiment(normalized_text: str) -> DisplayLabel:
    """
    Pick the sentiment icon for a normalized model answer.

    >>> match_sentiment("positive").icon
    '👍'
    >>> match_sentiment("i cannot tell").category
    <SentimentEnum.UNKNOWN: 'unknown'>
    """
    text = normalized_text.lower()
    for category, icon in SENTIMENT_ICONS:
        if category.value in text:
            return DisplayLabel(category=category, icon=icon, text=category.value.capitalize())
    return DisplayLabel(category=SentimentEnum.UNKNOWN, icon=SENTIMENT_UNKNOWN_ICON)


def match_noun_density(normalized_text: str) -> DisplayLabel:
    """Pick the noun-density badge for a normalized model answer."""
    text = normalized_text.lower()
    for category, badge in NOUN_DENSITY_BADGES:
        if category.value in text:
            return DisplayLabel(category=category, icon=badge, text=category.value.capitalize())
    return DisplayLabel(category=NounDensityEnum.UNKNOWN, icon=NOUN_DENSITY_UNKNOWN_BADGE)


def match_scored_sentiment(label: str, score: float) -> DisplayLabel:
    """
    Map a classifier label/score pair to a sentiment display.

    Only POSITIVE or NEGATIVE above the 0.5 threshold count; anything else is
    shown as neutral. The caption carries the confidence as a percentage.
    """
    upper = (label or "").upper()
    if upper == "POSITIVE" and score > SCORE_THRESHOLD:
        category, icon = SentimentEnum.POSITIVE, "👍"
    elif upper == "NEGATIVE" and score > SCORE_THRESHOLD:
        category, icon = SentimentEnum.NEGATIVE, "👎"
    else:
        category, icon = SentimentEnum.NEUTRAL, "❓"

    caption = f"{category.value.capitalize()} ({score * 100:.1f}% confidence)"
    return DisplayLabel(category=category, icon=icon, text=caption)
