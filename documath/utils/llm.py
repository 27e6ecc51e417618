"""
Vision-capable LLM providers.

Each provider sends a text prompt plus a list of images in one request and
returns the model's text. Images are (mime_type, raw_bytes) pairs so callers
do not depend on any SDK's content-block format.

SDKs are imported when a provider is constructed, so only the one in use has
to be installed (pip install documath[llm] installs all three).
"""

import base64
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

MAX_RETRIES = 5
BASE_DELAY = 1.0

# Whole pages of text come back in one response
MAX_OUTPUT_TOKENS = 8192

DEFAULT_PROVIDER = "gemini"

T = TypeVar("T")

ImageInput = Tuple[str, bytes]


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: Type[Exception],
    retry_message: str,
) -> T:
    """
    Run operation, retrying on retryable_exception with exponential backoff.

    The last failure is re-raised once MAX_RETRIES attempts are used up.
    """
    attempt = 1
    while True:
        try:
            return operation()
        except retryable_exception:
            if attempt == MAX_RETRIES:
                raise
            delay = BASE_DELAY * 2 ** (attempt - 1)
            logger.warning(f"{retry_message}; retry {attempt}/{MAX_RETRIES - 1} in {delay:.0f}s")
            time.sleep(delay)
            attempt += 1


def _base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _missing_sdk(package: str) -> ImportError:
    return ImportError(f"{package} package required. Install with: pip install {package}")


@dataclass
class LLMResponse:
    """Text returned by a provider, with token usage."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Base class for vision-capable providers.

    Subclasses declare prefix, default_model, api_key_vars and retry_message,
    and implement:
    - _connect(api_key): import the SDK, return (client, retryable exception type)
    - _call_api(prompt, images): one request, no retries
    """

    prefix: str
    default_model: str
    # Environment variables checked in order for the API key
    api_key_vars: Tuple[str, ...]
    retry_message: str = "Provider busy"

    def __init__(self, model: Optional[str] = None):
        api_key = next((os.getenv(var) for var in self.api_key_vars if os.getenv(var)), None)
        if not api_key:
            raise ValueError(f"{self.api_key_vars[0]} environment variable not set")

        self.model = model or self.default_model
        self.client, self.retryable_exception = self._connect(api_key)

    @property
    def name(self) -> str:
        """Provider and model, e.g. 'gemini/gemini-2.5-flash'."""
        return f"{self.prefix}/{self.model}"

    @abstractmethod
    def _connect(self, api_key: str) -> Tuple[Any, Type[Exception]]:
        pass

    @abstractmethod
    def _call_api(self, prompt: str, images: Sequence[ImageInput]) -> LLMResponse:
        pass

    def generate(self, prompt: str, images: Sequence[ImageInput] = ()) -> LLMResponse:
        """Send images followed by the prompt, retrying transient provider errors."""
        return _retry_with_backoff(
            partial(self._call_api, prompt, list(images)),
            self.retryable_exception,
            f"{self.name}: {self.retry_message}",
        )


class AnthropicProvider(LLMProvider):
    prefix = "anthropic"
    default_model = "claude-sonnet-4-20250514"
    api_key_vars = ("ANTHROPIC_API_KEY",)
    retry_message = "API overloaded"

    def _connect(self, api_key):
        try:
            import anthropic
        except ImportError:
            raise _missing_sdk("anthropic")
        return anthropic.Anthropic(api_key=api_key), anthropic.OverloadedError

    def _call_api(self, prompt, images):
        blocks = [
            {"type": "image", "source": {"type": "base64", "media_type": mime, "data": _base64(data)}}
            for mime, data in images
        ]
        blocks.append({"type": "text", "text": prompt})

        response = self.client.messages.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            messages=[{"role": "user", "content": blocks}],
        )
        text = "".join(block.text for block in response.content if block.type == "text")
        return LLMResponse(text, self.model, response.usage.input_tokens, response.usage.output_tokens)


class OpenAIProvider(LLMProvider):
    prefix = "openai"
    default_model = "gpt-4o"
    api_key_vars = ("OPENAI_API_KEY",)
    retry_message = "Rate limit hit"

    def _connect(self, api_key):
        try:
            import openai
        except ImportError:
            raise _missing_sdk("openai")
        return openai.OpenAI(api_key=api_key), openai.RateLimitError

    def _call_api(self, prompt, images):
        parts = [
            {"type": "image_url", "image_url": {"url": f"data:{mime};base64,{_base64(data)}"}}
            for mime, data in images
        ]
        parts.append({"type": "text", "text": prompt})

        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            messages=[{"role": "user", "content": parts}],
        )
        usage = response.usage
        return LLMResponse(
            response.choices[0].message.content,
            self.model,
            usage.prompt_tokens,
            usage.completion_tokens,
        )


class GeminiProvider(LLMProvider):
    """Google Gemini; the key may also be given as API_KEY."""

    prefix = "gemini"
    default_model = "gemini-2.5-flash"
    api_key_vars = ("GEMINI_API_KEY", "API_KEY")
    retry_message = "Quota exhausted"

    def _connect(self, api_key):
        try:
            import google.generativeai as genai
            from google.api_core.exceptions import ResourceExhausted
        except ImportError:
            raise _missing_sdk("google-generativeai")
        genai.configure(api_key=api_key)
        return genai.GenerativeModel(self.model), ResourceExhausted

    def _call_api(self, prompt, images):
        contents = [{"mime_type": mime, "data": data} for mime, data in images]
        contents.append(prompt)

        response = self.client.generate_content(
            contents, generation_config={"max_output_tokens": MAX_OUTPUT_TOKENS}
        )
        usage = response.usage_metadata
        return LLMResponse(
            response.text, self.model, usage.prompt_token_count, usage.candidates_token_count
        )


PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
    "gemini": GeminiProvider,
}


def get_provider(
    provider_name: Optional[str] = None, model: Optional[str] = None
) -> LLMProvider:
    """
    Build a provider by name.

    Args:
        provider_name: "anthropic", "openai" or "gemini" (default: LLM_PROVIDER env var, then gemini)
        model: Model name (default: the provider's default model)

    Raises:
        ValueError: Unknown provider name or missing API key
        ImportError: The provider's SDK is not installed
    """
    provider_name = provider_name or os.getenv("LLM_PROVIDER", DEFAULT_PROVIDER)

    provider_cls = PROVIDERS.get(provider_name.lower())
    if provider_cls is None:
        raise ValueError(
            f"Unknown provider: {provider_name}. Use one of: {', '.join(sorted(PROVIDERS))}"
        )
    return provider_cls(model=model)
