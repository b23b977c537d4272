"""
OpenAI chat completion caller with linear backoff on rate-limit and quota errors.
"""
import time
import logging
from typing import Callable, Dict, List, Optional

from openai import OpenAI, RateLimitError

from .config import Settings
from .exceptions import CompletionError, ConfigurationError
from .utils import linear_backoff, retry_with_policy

logger = logging.getLogger(__name__)

Message = Dict[str, str]


def is_rate_limit_error(error: Exception) -> bool:
    """True when a provider error means back off and try again"""
    if isinstance(error, RateLimitError):
        return True
    status = getattr(error, 'status_code', None) or getattr(error, 'status', None)
    if status == 429:
        return True
    return getattr(error, 'code', None) == 'insufficient_quota'


class CompletionClient:
    """Thin wrapper around the OpenAI chat completions API"""

    def __init__(self,
                 client=None,
                 model: Optional[str] = None,
                 settings: Optional[Settings] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            client: Pre-built OpenAI client; built from settings when omitted
            model: Default model identifier
            settings: Settings used to build the client
            sleep: Sleep function used between retries
        """
        settings = settings or Settings.from_env()
        self.model = model or settings.openai_model
        self.sleep = sleep
        if client is None:
            client = self._setup_client(settings)
        self.client = client

    def _setup_client(self, settings: Settings):
        """Set up the OpenAI client"""
        try:
            client = OpenAI(api_key=settings.require('openai_api_key'))
            logger.info("OpenAI client initialized successfully.")
            return client
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize OpenAI client: {e}")
            raise ConfigurationError(f"Failed to initialize OpenAI client: {str(e)}")

    def create(self, messages: List[Message], model: Optional[str] = None, retries: int = 3):
        """
        Request a chat completion, retrying on rate-limit or quota errors.

        Attempt i is followed by an i-second wait. Any other error propagates
        immediately.

        Args:
            messages: Role-tagged chat messages
            model: Model identifier, defaults to the client's model
            retries: Total attempt budget

        Returns:
            Raw completion response

        Raises:
            RetriesExhaustedError: If every attempt was rate limited
        """
        model = model or self.model
        return retry_with_policy(
            lambda: self.client.chat.completions.create(model=model, messages=messages),
            max_attempts=retries,
            should_retry=is_rate_limit_error,
            delay_for=linear_backoff,
            sleep=self.sleep,
        )

    def complete(self, messages: List[Message], model: Optional[str] = None, retries: int = 3) -> str:
        """Request a completion and return the stripped message text ("" when the message is empty)"""
        response = self.create(messages, model=model, retries=retries)
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Malformed completion response: {e}")
            raise CompletionError(f"Completion response had no message: {str(e)}")
        return (content or "").strip()
