"""
Integration tests for Review Insight.

Exercise the FastAPI app end to end with TestClient; outbound HTTP is
mocked with respx, so no external service is needed.
"""
