"""
Review Insight: sentiment and noun-density tagging for product reviews.

Loads a tab-separated review dataset, picks a random review and asks a hosted
text-inference API to classify it. Also ships a small event logger that posts
click/heartbeat events to a spreadsheet-backed endpoint.

Architecture: FastAPI presentation layer + stateless InferenceRequester + httpx
"""

__version__ = "0.1.0"
