"""
Unit tests for Review Insight.

Test individual components in isolation:
- Inference requester (status classification, warmup retry, parsing)
- Prompt builder and label matching
- Review dataset loading
- Local state store and event logger
- Controller state handling
"""
