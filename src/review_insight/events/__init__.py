"""
Event logging to a spreadsheet-backed web app.

- event_logger.py: form-encoded POST that avoids a CORS preflight
"""

from review_insight.events.event_logger import MISSING_URL_MESSAGE, EventLogger

__all__ = ["EventLogger", "MISSING_URL_MESSAGE"]
