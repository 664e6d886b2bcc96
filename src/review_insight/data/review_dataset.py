"""
Tab-separated review dataset.

The file needs a header row with at least a ``text`` column. Every cell is
read as a string so empty cells stay empty strings instead of NaN; rows whose
text is blank after stripping are dropped.
"""

import io
import random
from pathlib import Path
from typing import Optional, Union

import pandas as pd
import structlog

logger = structlog.get_logger(__name__)

TEXT_COLUMN = "text"


class DatasetError(Exception):
    """Raised when the TSV cannot be read or holds no usable review."""


class ReviewDataset:
    """Immutable list of review texts loaded once at startup."""

    def __init__(self, reviews: list[str], source: Optional[str] = None):
        self.reviews = list(reviews)
        self.source = source

    def __len__(self) -> int:
        return len(self.reviews)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, source: Optional[str] = None) -> "ReviewDataset":
        """Build a dataset from an already parsed frame."""
        if TEXT_COLUMN not in frame.columns:
            raise DatasetError(
                f"TSV has no '{TEXT_COLUMN}' column (columns: {', '.join(map(str, frame.columns))})"
            )

        texts = frame[TEXT_COLUMN].fillna("").astype(str).str.strip()
        reviews = [t for t in texts.tolist() if t]
        if not reviews:
            raise DatasetError("No review texts found in TSV")

        logger.info(
            "Review dataset loaded",
            source=source,
            rows=len(frame),
            reviews=len(reviews),
            dropped=len(frame) - len(reviews),
        )
        return cls(reviews, source=source)

    @classmethod
    def from_tsv(cls, path: Union[str, Path]) -> "ReviewDataset":
        """
        Load reviews from a TSV file on disk.

        Raises:
            DatasetError: file missing, unparsable, without text column or empty
        """
        path = Path(path)
        try:
            frame = pd.read_csv(
                path,
                sep="\t",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except FileNotFoundError:
            raise DatasetError(f"TSV load failed: {path} not found")
        except OSError as e:
            raise DatasetError(f"TSV load failed: {e}") from e
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DatasetError(f"Error parsing TSV file: {e}")
        return cls.from_frame(frame, source=str(path))

    @classmethod
    def from_text(cls, tsv_text: str, source: Optional[str] = None) -> "ReviewDataset":
        """Load reviews from TSV content already in memory."""
        try:
            frame = pd.read_csv(
                io.StringIO(tsv_text),
                sep="\t",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise DatasetError(f"Error parsing TSV file: {e}")
        return cls.from_frame(frame, source=source)

    def random_review(self, rng: Optional[random.Random] = None) -> str:
        """Pick one review uniformly at random."""
        if not self.reviews:
            raise DatasetError("Data not loaded.")
        return (rng or random).choice(self.reviews)
