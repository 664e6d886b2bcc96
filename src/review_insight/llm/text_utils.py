"""
Text helpers for inference requests and responses.
"""


def normalize_generated_text(text: str) -> str:
    """
    Reduce generated text to its first line, lowercased and trimmed.

    Examples:
        >>> normalize_generated_text("Positive\\nbecause the battery lasts")
        'positive'
        >>> normalize_generated_text("  HIGH ")
        'high'
    """
    return str(text).split("\n", 1)[0].lower().strip()


def truncate_body(text: str, max_chars: int) -> str:
    """
    Keep a bounded prefix of an HTTP error body.

    Error pages from hosted endpoints can be large HTML documents; only the
    first ``max_chars`` characters end up in status messages and logs.
    """
    if max_chars <= 0:
        return ""
    return text[:max_chars]
