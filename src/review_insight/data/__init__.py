"""
Review dataset loading.

- review_dataset.py: TSV loader (pandas) and random review selection
"""

from review_insight.data.review_dataset import DatasetError, ReviewDataset

__all__ = ["DatasetError", "ReviewDataset"]
