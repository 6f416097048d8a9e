"""Completion backends for structured LLM queries.

The enrichment core only depends on the ``complete`` call. The OpenAI
implementation takes an already constructed client so tests (and callers
with their own client configuration) can substitute it freely.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import openai

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class BackendError(Exception):
    """Transport, auth, rate-limit or server-side failure from a backend.

    ``status`` is the HTTP status code when one was received, else None
    (timeouts, connection failures).
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self):
        if self.status is not None:
            return f"{self.message} (status {self.status})"
        return self.message


class CompletionBackend(ABC):
    """Interface for a chat-completion service."""

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        force_json_object: bool = True,
    ) -> str:
        """Send one request and return the raw reply text.

        Raises:
            BackendError: On any transport or service failure.
        """


class OpenAICompletionBackend(CompletionBackend):
    """Completion backend backed by the OpenAI chat completions API."""

    def __init__(self, client: openai.OpenAI, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings) -> "OpenAICompletionBackend":
        """Build a backend from a Settings object.

        SDK-level retries are disabled: one lookup is one request.
        """
        client = openai.OpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.request_timeout,
            max_retries=0,
        )
        return cls(client, model=settings.model)

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        force_json_object: bool = True,
    ) -> str:
        kwargs = {}
        if force_json_object:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                **kwargs,
            )
        except openai.APIStatusError as e:
            status = e.status_code
            if status == 401:
                message = "Invalid API key"
            elif status == 429:
                message = "Rate limit exceeded"
            elif status >= 500:
                message = "Completion API server error"
            else:
                message = f"Completion API error: {e.message}"
            logger.debug(f"OpenAI request failed with status {status}: {e.message}")
            raise BackendError(message, status=status) from e
        except openai.APITimeoutError as e:
            raise BackendError("Completion request timed out") from e
        except openai.APIConnectionError as e:
            raise BackendError(f"Could not reach completion API: {e}") from e
        except openai.OpenAIError as e:
            raise BackendError(f"Completion API error: {e}") from e

        usage = getattr(completion, "usage", None)
        if usage is not None:
            logger.debug(f"Tokens used: {usage.total_tokens}")

        return completion.choices[0].message.content or ""
