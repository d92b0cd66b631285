from __future__ import annotations

import json
from time import perf_counter
from typing import Any

import httpx
import openai
from openai import OpenAI

from shot2table.config import AIConfig
from shot2table.errors import ConfigMissingError, EmptyResponseError, ParseError, RequestError
from shot2table.extraction import parse_table_payload
from shot2table.image_input import encode_image
from shot2table.logging_config import logger
from shot2table.models import TableData
from shot2table.prompt_config import build_table_request

RAW_CONTENT_LOG_CHARS = 2000


def _first_message_content(completion: Any) -> str | None:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if isinstance(content, str) and content.strip():
        return content
    return None


class AnalysisClient:
    """Sends a screenshot to a chat-completion endpoint and reads back a table."""

    def __init__(self, config: AIConfig, http_client: httpx.Client | None = None) -> None:
        self.config = config
        self._http_client = http_client

    def _openai_client(self) -> OpenAI:
        # Single attempt per upload; the user decides whether to retry.
        return OpenAI(
            api_key=self.config.api_key,
            base_url=self.config.endpoint.rstrip("/"),
            timeout=self.config.timeout_seconds,
            max_retries=0,
            http_client=self._http_client,
        )

    def analyze(self, image: bytes) -> TableData:
        return self.analyze_base64(encode_image(image))

    def analyze_base64(self, image_base64: str) -> TableData:
        if not self.config.has_api_key:
            raise ConfigMissingError("API key is missing. Configure the AI settings first.")

        started_at = perf_counter()
        request = build_table_request(self.config.model, image_base64)
        logger.info(
            "Table analysis start endpoint=%s model=%s image_base64_chars=%s",
            self.config.endpoint,
            self.config.model,
            len(image_base64),
        )

        client = self._openai_client()
        try:
            completion = client.chat.completions.create(**request.to_payload())
        except openai.APIStatusError as exc:
            reason = exc.response.reason_phrase
            logger.error(
                "Table analysis HTTP error status=%s reason=%s model=%s",
                exc.status_code,
                reason,
                self.config.model,
            )
            raise RequestError(
                f"AI API error: {exc.status_code} {reason}".strip(),
                status_code=exc.status_code,
            ) from exc
        except openai.APIConnectionError as exc:
            logger.error(
                "Table analysis request failed endpoint=%s error=%s",
                self.config.endpoint,
                exc.__class__.__name__,
            )
            raise RequestError(f"AI API request failed: {exc}") from exc
        except (openai.APIError, json.JSONDecodeError) as exc:
            logger.error(
                "Table analysis response unreadable endpoint=%s error=%s",
                self.config.endpoint,
                exc.__class__.__name__,
            )
            raise RequestError(f"AI API returned an unreadable response: {exc.__class__.__name__}") from exc
        finally:
            # An injected http client belongs to the caller.
            if self._http_client is None:
                client.close()

        content = _first_message_content(completion)
        if content is None:
            logger.warning("Table analysis returned no content model=%s", self.config.model)
            raise EmptyResponseError("No response from AI.")

        try:
            table = parse_table_payload(content)
        except ParseError:
            logger.error(
                "Failed to parse AI response model=%s content=%s",
                self.config.model,
                content[:RAW_CONTENT_LOG_CHARS],
            )
            raise

        logger.info(
            "Table analysis done model=%s headers=%s rows=%s duration_ms=%s",
            self.config.model,
            len(table.headers),
            len(table.rows),
            round((perf_counter() - started_at) * 1000, 1),
        )
        return table


def create_client(config: AIConfig, http_client: httpx.Client | None = None) -> AnalysisClient:
    return AnalysisClient(config, http_client=http_client)
