"""
Prompt builder for summary requests.

Responsible for:
- Loading and rendering Jinja2 templates (system + user prompts)
- Truncating long transcripts at a sentence boundary
- Constructing the CompletionRequest re-used by every retry
"""

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader
import structlog

from summary_service.llm.text_utils import truncate_at_sentence_boundary
from summary_service.models.llm_models import ChatMessage, CompletionRequest


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "prompts"


class PromptBuilder:
    """
    Build completion requests for meeting transcripts.

    Handles:
    - Template rendering (Jinja2)
    - Transcript truncation (sentence boundary)
    - Model parameters (model, temperature, max tokens)
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        prompt_version: str = "summarize-v1",
        content_truncation_limit: int = 60000,
        default_model: str = "gpt-4o-mini",
        default_temperature: float = 0.3,
        default_max_tokens: int = 1500,
    ):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory with system_prompt.txt and
                user_prompt_template.txt (default: bundled templates)
            prompt_version: Tag recorded with every summary and audit event
            content_truncation_limit: Max transcript characters sent to the model
            default_model: Model identifier
            default_temperature: Sampling temperature
            default_max_tokens: Completion token cap
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.prompt_version = prompt_version
        self.content_truncation_limit = content_truncation_limit
        self.default_model = default_model
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False  # plain-text prompts
        )

        try:
            self.system_template = self.jinja_env.get_template("system_prompt.txt")
            self.user_template = self.jinja_env.get_template("user_prompt_template.txt")
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e), templates_dir=str(self.templates_dir))
            raise

        logger.info(
            "PromptBuilder initialized",
            templates_dir=str(self.templates_dir),
            prompt_version=prompt_version,
            content_truncation_limit=content_truncation_limit,
            model=default_model,
        )

    def build_system_prompt(self) -> str:
        """Render the system prompt."""
        return self.system_template.render().strip()

    def build_user_prompt(self, transcript: str) -> tuple[str, dict]:
        """
        Render the user prompt for a transcript.

        Returns:
            Tuple of (rendered_prompt, metadata) where metadata records the
            original and sent transcript lengths.
        """
        text = transcript.strip()
        sent = truncate_at_sentence_boundary(text, self.content_truncation_limit)
        truncated = len(sent) < len(text)

        if truncated:
            logger.info(
                "Transcript truncated",
                original_length=len(text),
                truncated_length=len(sent),
            )

        rendered = self.user_template.render(transcript=sent, truncated=truncated).strip()
        metadata = {
            "original_length": len(text),
            "sent_length": len(sent),
            "truncated": truncated,
        }
        return rendered, metadata

    def build_request(self, transcript: str) -> CompletionRequest:
        """Build the complete CompletionRequest for a transcript."""
        user_prompt, metadata = self.build_user_prompt(transcript)
        logger.debug("Built completion request", prompt_version=self.prompt_version, **metadata)
        return CompletionRequest(
            messages=(
                ChatMessage(role="system", content=self.build_system_prompt()),
                ChatMessage(role="user", content=user_prompt),
            ),
            model=self.default_model,
            temperature=self.default_temperature,
            max_tokens=self.default_max_tokens,
        )
