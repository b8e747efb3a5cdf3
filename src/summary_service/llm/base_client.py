"""
Abstract base client for text completion.

Defines the interface every completion backend implements. A client performs
ONE attempt per `complete()` call; retries, backoff and quality judgement
live above it in the retry engine and the output validator.
"""

from abc import ABC, abstractmethod
import structlog

from summary_service.models.llm_models import CompletionRequest, CompletionResponse


logger = structlog.get_logger(__name__)


class BaseCompletionClient(ABC):
    """
    Abstract base class for completion clients.

    Responsibilities:
    - Send one completion request to the endpoint
    - Parse the response into CompletionResponse
    - Classify every failure into an ErrorKind (raise CompletionError)

    Does NOT handle:
    - Prompt construction (PromptBuilder)
    - Retries and backoff (TransportRetryEngine)
    - Quality judgement (OutputValidator)
    """

    def __init__(self, base_url: str, timeout: float = 60.0, **kwargs):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the completion API (e.g., https://api.openai.com/v1)
            timeout: Per-attempt request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs

        logger.info(
            "Initialized completion client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Perform a single completion attempt.

        Args:
            request: Provider-neutral completion request

        Returns:
            CompletionResponse with generated text and metadata

        Raises:
            CompletionError: Any failure, already classified by kind
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check whether the endpoint is reachable.

        Must not raise; returns False on any error.
        """

    async def close(self):
        """Release connections. Default implementation does nothing."""
        logger.debug("Closing completion client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
