"""Chat-completion wire types and their JSON encoding."""

import json
from dataclasses import dataclass, field
from typing import Any

from ..errors import EncodeError, MalformedErrorBodyError, MalformedSuccessBodyError

FINISH_REASON_LENGTH = "length"


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str


@dataclass(frozen=True)
class ResponseFormat:
    type: str = "text"


@dataclass(frozen=True)
class CreateChatCompletion:
    """Request body for the chat completions endpoint."""

    model: str
    messages: tuple[ChatMessage, ...]
    max_tokens: int | None = None
    n: int = 1
    seed: int = 0
    response_format: ResponseFormat = ResponseFormat()
    stream: bool = False


@dataclass(frozen=True)
class Choice:
    index: int
    message: ChatMessage
    finish_reason: str


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


@dataclass(frozen=True)
class ChatCompletion:
    """Successful response body."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    system_fingerprint: str = ""
    choices: tuple[Choice, ...] = ()
    usage: Usage | None = None


@dataclass(frozen=True)
class ErrorDetail:
    message: str
    type: str = ""
    param: str | None = None
    code: str | None = None


@dataclass(frozen=True)
class ErrorResponse:
    error: ErrorDetail = field(default_factory=lambda: ErrorDetail(message=""))


def request_to_dict(request: CreateChatCompletion) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "model": request.model,
        "messages": [{"role": m.role, "content": m.content} for m in request.messages],
    }
    if request.max_tokens is not None:
        payload["max_tokens"] = request.max_tokens
    payload["n"] = request.n
    payload["seed"] = request.seed
    payload["response_format"] = {"type": request.response_format.type}
    payload["stream"] = request.stream
    return payload


def encode_request(request: CreateChatCompletion) -> bytes:
    """Serialize a request to its JSON wire form.

    Raises:
        EncodeError: If the request holds values JSON cannot represent
    """
    try:
        return json.dumps(request_to_dict(request), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError, AttributeError) as e:
        raise EncodeError(f"failed to marshal request body: {e}") from e


def _load_object(body: bytes | str) -> dict[str, Any]:
    data = json.loads(body)
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _decode_choice(data: dict[str, Any]) -> Choice:
    message = data.get("message") or {}
    return Choice(
        index=int(data.get("index") or 0),
        message=ChatMessage(
            role=message.get("role") or "",
            content=message.get("content") or "",
        ),
        finish_reason=data.get("finish_reason") or "",
    )


def decode_completion(body: bytes | str) -> ChatCompletion:
    """Parse a success body.

    Raises:
        MalformedSuccessBodyError: If the body is not a chat completion object
    """
    try:
        data = _load_object(body)
        usage_data = data.get("usage")
        usage = None
        if usage_data:
            usage = Usage(
                prompt_tokens=int(usage_data.get("prompt_tokens") or 0),
                completion_tokens=int(usage_data.get("completion_tokens") or 0),
                total_tokens=int(usage_data.get("total_tokens") or 0),
            )
        return ChatCompletion(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created=int(data.get("created") or 0),
            model=data.get("model") or "",
            system_fingerprint=data.get("system_fingerprint") or "",
            choices=tuple(_decode_choice(c) for c in data.get("choices") or []),
            usage=usage,
        )
    except (ValueError, TypeError, AttributeError) as e:
        raise MalformedSuccessBodyError(f"failed to unmarshal response body: {e}") from e


def decode_error(body: bytes | str) -> ErrorResponse:
    """Parse an error body of the form ``{"error": {"message": ...}}``.

    Raises:
        MalformedErrorBodyError: If the body does not carry an error object
    """
    try:
        data = _load_object(body)
        error = data["error"]
        return ErrorResponse(
            error=ErrorDetail(
                message=error.get("message") or "",
                type=error.get("type") or "",
                param=error.get("param"),
                code=error.get("code"),
            )
        )
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise MalformedErrorBodyError(f"failed to unmarshal error response: {e}") from e
