"""
Prompt builder for review classification requests.

Renders the instruction templates in ``review_insight/prompts`` around a
review text. Two prompts exist:
- sentiment: positive / negative / neutral
- noun density: High (>15), Medium (6-15), Low (<6)
"""

from pathlib import Path
from typing import Optional

import structlog
from jinja2 import Environment, FileSystemLoader

from review_insight.models.inference_models import ClassificationRequest


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "prompts"

SENTIMENT_TEMPLATE = "sentiment_prompt.txt"
NOUN_DENSITY_TEMPLATE = "noun_density_prompt.txt"


class PromptBuilder:
    """
    Build classification prompts from review texts.

    Templates are loaded once; rendering is cheap and stateless.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing the prompt templates
                (defaults to the templates shipped with the package)
        """
        self.templates_dir = Path(templates_dir or DEFAULT_TEMPLATES_DIR)

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False  # Plain-text prompts, reviews may contain < and &
        )

        try:
            self.sentiment_template = self.jinja_env.get_template(SENTIMENT_TEMPLATE)
            self.noun_density_template = self.jinja_env.get_template(NOUN_DENSITY_TEMPLATE)
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e), templates_dir=str(self.templates_dir))
            raise

        logger.debug("Loaded prompt templates", templates_dir=str(self.templates_dir))

    @staticmethod
    def _clean(review_text: str) -> str:
        text = (review_text or "").strip()
        if not text:
            raise ValueError("Please provide review text.")
        return text

    def build_sentiment_prompt(self, review_text: str) -> str:
        """
        Render the sentiment instruction for a review.

        Raises:
            ValueError: review text is empty or whitespace
        """
        return self.sentiment_template.render(review_text=self._clean(review_text)).strip()

    def build_noun_density_prompt(self, review_text: str) -> str:
        """
        Render the noun-count instruction for a review.

        Raises:
            ValueError: review text is empty or whitespace
        """
        return self.noun_density_template.render(review_text=self._clean(review_text)).strip()

    def build_request(
        self,
        prompt_text: str,
        auth_token: Optional[str] = None,
    ) -> ClassificationRequest:
        """Wrap a rendered prompt and an optional token into a request."""
        token = (auth_token or "").strip() or None
        return ClassificationRequest(prompt_text=prompt_text, auth_token=token)
