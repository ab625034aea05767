"""
Gemini chat completion provider.

Flattens a role-tagged message list into one prompt string and sends it to
the chat model. Generation failures are logged and turned into a fixed
fallback answer so the caller never sees a provider exception.

Dependencies: langchain_core, langchain_google_genai, pdf_rag.configs
System role: Generation adapter
"""

import logging
from collections.abc import Callable, Sequence

from langchain_core.language_models import BaseChatModel

from pdf_rag.configs import GoogleSettings
from pdf_rag.core.exceptions import ConfigurationError
from pdf_rag.core.providers.models import ChatMessage

logger = logging.getLogger(__name__)

CHAT_FALLBACK_MESSAGE = "Sorry, an error occurred while generating the response."

ChatModelFactory = Callable[[float], BaseChatModel]


def build_prompt(messages: Sequence[ChatMessage]) -> str:
    """
    Convert messages into a single prompt string.

    system -> "Instructions: ...", user -> raw content, assistant -> "Assistant: ...".

    Args:
        messages: Ordered chat messages

    Returns:
        str: Prompt text
    """
    prompt = ""
    for message in messages:
        if message.role == "system":
            prompt += f"Instructions: {message.content}\n\n"
        elif message.role == "user":
            prompt += f"{message.content}\n"
        elif message.role == "assistant":
            prompt += f"Assistant: {message.content}\n"
    return prompt


def _message_text(content) -> str:
    # Gemini may return a list of content parts instead of a plain string
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content)


class GeminiChatProvider:
    """Chat completion provider backed by ChatGoogleGenerativeAI."""

    def __init__(
        self,
        settings: GoogleSettings,
        model_factory: ChatModelFactory | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            settings: Gemini settings (API key, chat model, output cap, timeout)
            model_factory: Optional callable building a chat model for a given
                temperature. Defaults to ChatGoogleGenerativeAI.

        Raises:
            ConfigurationError: When no factory is injected and GOOGLE_API_KEY is blank
        """
        self._settings = settings
        if model_factory is None:
            if not settings.api_key.strip():
                raise ConfigurationError(
                    "Google API key is not set in environment variables.",
                    setting="GOOGLE_API_KEY",
                )
            model_factory = self._default_factory
            logger.info(f"Chat Model: {settings.chat_model}")
        self._model_factory = model_factory
        self._models: dict[float, BaseChatModel] = {}

    @property
    def model_name(self) -> str:
        return self._settings.chat_model

    def _default_factory(self, temperature: float) -> BaseChatModel:
        from langchain_google_genai import ChatGoogleGenerativeAI

        kwargs = {}
        if self._settings.request_timeout is not None:
            kwargs["timeout"] = self._settings.request_timeout
        return ChatGoogleGenerativeAI(
            model=self._settings.chat_model,
            google_api_key=self._settings.api_key,
            temperature=temperature,
            max_output_tokens=self._settings.max_output_tokens,
            **kwargs,
        )

    def _get_model(self, temperature: float) -> BaseChatModel:
        if temperature not in self._models:
            self._models[temperature] = self._model_factory(temperature)
        return self._models[temperature]

    def chat_completion(self, messages: Sequence[ChatMessage], temperature: float = 0.1) -> str:
        """
        Generate a completion for the given messages.

        Args:
            messages: Role-tagged messages, flattened with build_prompt
            temperature: Sampling temperature

        Returns:
            str: Generated text, or CHAT_FALLBACK_MESSAGE on any failure
        """
        try:
            prompt = build_prompt(messages)
            response = self._get_model(temperature).invoke(prompt)
            return _message_text(response.content)
        except Exception as e:
            logger.error(f"Error generating chat completion: {type(e).__name__}: {e}")
            return CHAT_FALLBACK_MESSAGE
