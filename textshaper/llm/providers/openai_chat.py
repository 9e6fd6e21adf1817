"""OpenAI chat completions HTTP client."""

import threading

import requests

from ...config import ClientConfig
from ...errors import (
    CancelledError,
    ConfigurationError,
    TransportError,
    UnexpectedStatusCodeError,
)
from ...logger import get_logger
from ..codec import (
    ChatCompletion,
    ChatMessage,
    CreateChatCompletion,
    decode_completion,
    decode_error,
    encode_request,
)

logger = get_logger("openai_chat")

READ_CHUNK_SIZE = 8192


class OpenAIChatClient:
    """Chat completions over plain HTTP.

    Holds only read-only configuration, so one instance can serve
    concurrent shaping calls.
    """

    id = "openai"

    def __init__(self, config: ClientConfig):
        if not config.api_key:
            raise ConfigurationError("OpenAI API key is not set")
        if not config.model:
            raise ConfigurationError("Model not specified in configuration")
        self.config = config

    def make_request(self, prompt: str) -> CreateChatCompletion:
        return CreateChatCompletion(
            model=self.config.model,
            messages=(ChatMessage(role="user", content=prompt),),
            max_tokens=self.config.max_tokens,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

    def _log_request(self, request: CreateChatCompletion, body: bytes) -> None:
        if self.config.api_log_level == "info":
            logger.info(
                "chat.request",
                model=request.model,
                n=request.n,
                seed=request.seed,
                response_format=request.response_format.type,
            )
        elif self.config.api_log_level == "debug":
            logger.info("chat.request", body=body.decode("utf-8", errors="replace"))

    def _log_response(self, completion: ChatCompletion, body: bytes) -> None:
        if self.config.api_log_level == "info":
            fields = {
                "response_id": completion.id,
                "response_object": completion.object,
                "response_created": completion.created,
                "response_model": completion.model,
                "system_fingerprint": completion.system_fingerprint,
                "choices_count": len(completion.choices),
            }
            if completion.choices:
                fields["finish_reason"] = completion.choices[0].finish_reason
                fields["choice_index"] = completion.choices[0].index
            logger.info("chat.response", **fields)
        elif self.config.api_log_level == "debug":
            logger.info("chat.response", body=body.decode("utf-8", errors="replace"))

    def _read_body(
        self, response: requests.Response, cancel: threading.Event | None
    ) -> bytes:
        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                if cancel is not None and cancel.is_set():
                    raise CancelledError("request cancelled while reading response body")
                chunks.append(chunk)
        except requests.RequestException as e:
            raise TransportError(f"failed to read response body: {e}") from e
        return b"".join(chunks)

    def send(
        self,
        request: CreateChatCompletion,
        cancel: threading.Event | None = None,
    ) -> ChatCompletion:
        """Send one completion request.

        Args:
            request: Request to send
            cancel: Optional event; once set, the exchange is abandoned

        Returns:
            Decoded completion

        Raises:
            EncodeError: Request could not be serialized
            TransportError: Connection or read failure
            CancelledError: ``cancel`` was set before the body was read
            UnexpectedStatusCodeError: Status above 299
            MalformedErrorBodyError: Error body could not be decoded
            MalformedSuccessBodyError: Success body could not be decoded
        """
        body = encode_request(request)
        self._log_request(request, body)

        if cancel is not None and cancel.is_set():
            raise CancelledError("request cancelled before send")

        try:
            response = requests.post(
                self.config.endpoint,
                headers=self._headers(),
                data=body,
                timeout=self.config.timeout_s,
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportError(f"request failed: {e}") from e

        try:
            status_code = response.status_code
            response_body = self._read_body(response, cancel)
        finally:
            response.close()

        if status_code > 299:
            error_response = decode_error(response_body)
            logger.error(
                "chat.error",
                status_code=status_code,
                error_message=error_response.error.message,
            )
            raise UnexpectedStatusCodeError(status_code, error_response.error.message)

        completion = decode_completion(response_body)
        self._log_response(completion, response_body)
        return completion
