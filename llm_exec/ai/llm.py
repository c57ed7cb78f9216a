import os
import httpx

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..errors import ApiError, EmptyResponseError, MissingCredentialsError

API_URL = "https://api.anthropic.com/v1/messages"
API_VERSION = "2023-06-01"
API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"
DEFAULT_TIMEOUT = 30.0


@dataclass
class TextBlock:
    text: str


@dataclass
class OtherBlock:
    """Any content block that is not text (tool use, thinking, ...)."""

    type: str
    data: Dict = field(default_factory=dict)


ContentBlock = Union[TextBlock, OtherBlock]


def parse_content_block(block: Any) -> ContentBlock:
    if isinstance(block, dict):
        block_type = block.get("type", "text")
        text = block.get("text")
        if block_type == "text" and isinstance(text, str):
            return TextBlock(text)
        return OtherBlock(type=str(block_type), data=block)
    return OtherBlock(type=type(block).__name__)


@dataclass
class LLMCompletionResponse:
    """Wraps the message returned by the Messages API."""

    message: Dict

    @property
    def content(self) -> List[ContentBlock]:
        blocks = self.message.get("content") or []
        if not isinstance(blocks, list):
            return []
        return [parse_content_block(block) for block in blocks]

    @property
    def first_text(self) -> Optional[str]:
        """The text of the first text block, if any."""
        for block in self.content:
            if isinstance(block, TextBlock):
                return block.text
        return None


class LLMClient:
    """
    A thin client for the Anthropic Messages API. One request, one attempt:
    every failure is surfaced to the caller as an `ApiError`.
    """

    def __init__(
        self,
        api_key: str,
        url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initializes the LLM client.

        Args:
            api_key: The provider API key sent in the `x-api-key` header.
            url: The Messages endpoint.
            timeout: Seconds to wait for the whole request before giving up.
            transport: Optional httpx transport, used by tests to stub the network.
        """
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_env(cls, **kwargs) -> "LLMClient":
        api_key = os.environ.get(API_KEY_ENV_VAR)
        if not api_key:
            raise MissingCredentialsError(API_KEY_ENV_VAR)
        return cls(api_key, **kwargs)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": API_VERSION,
            "content-type": "application/json",
        }

    def completion(self, request: Dict) -> LLMCompletionResponse:
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.url, headers=self.headers, json=request)
        except httpx.TimeoutException as e:
            raise ApiError(f"request timed out after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            raise ApiError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise ApiError(_error_message(response), status_code=response.status_code)

        try:
            message = response.json()
        except ValueError as e:
            raise EmptyResponseError("The API returned a body that is not JSON") from e

        if not isinstance(message, dict):
            raise EmptyResponseError("The API returned an unexpected response")
        return LLMCompletionResponse(message=message)


def _error_message(response: httpx.Response) -> str:
    # The API wraps failures as {"type": "error", "error": {"type": ..., "message": ...}}
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])

    return response.text or response.reason_phrase
