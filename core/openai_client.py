"""
OpenAI backend for the content intelligence client.
Structured JSON replies via chat completions, images via the images endpoint.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from openai import AsyncOpenAI, OpenAIError

from config.settings import REQUEST_TIMEOUT
from core.errors import RemoteCallFailure
from core.generation import GenerationBackend, GenerationReply, GenerationRequest, ReplyPart

logger = logging.getLogger(__name__)


class OpenAIClient(GenerationBackend):
    """Async OpenAI client. No automatic retries: failures go straight to the caller."""

    def __init__(self, api_key: str, timeout: float = REQUEST_TIMEOUT, client: Optional[Any] = None):
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            http_client = httpx.AsyncClient(timeout=self.timeout)
            self._client = AsyncOpenAI(api_key=self.api_key, http_client=http_client, max_retries=0)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def send(self, request: GenerationRequest) -> GenerationReply:
        try:
            if request.image:
                return await self._generate_image(request)
            return await self._generate_text(request)
        except (OpenAIError, httpx.HTTPError) as e:
            logger.warning(f"OpenAI API error ({request.model}): {e}")
            raise RemoteCallFailure(f"OpenAI call failed: {e}") from e

    # ── Structured text ──────────────────────────────────────────────────

    async def _generate_text(self, request: GenerationRequest) -> GenerationReply:
        kwargs: Dict[str, Any] = {
            "model": request.model,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.response_schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": request.schema_name,
                    "strict": True,
                    "schema": request.response_schema,
                },
            }

        response = await self.client.chat.completions.create(**kwargs)
        message = response.choices[0].message
        content = message.content
        if content is None:
            # refusals come back without content
            content = getattr(message, "refusal", None) or ""
        return GenerationReply(parts=[ReplyPart(text=content)])

    # ── Images ───────────────────────────────────────────────────────────

    async def _generate_image(self, request: GenerationRequest) -> GenerationReply:
        kwargs: Dict[str, Any] = {"model": request.model, "prompt": request.prompt, "n": 1}
        if request.image_size:
            kwargs["size"] = request.image_size
        if request.image_quality:
            kwargs["quality"] = request.image_quality

        logger.debug(f"Image {request.aspect_ratio or 'default'} aspect as size {request.image_size}")
        response = await self.client.images.generate(**kwargs)
        parts: List[ReplyPart] = []
        for image in response.data or []:
            revised = getattr(image, "revised_prompt", None)
            if revised:
                parts.append(ReplyPart(text=revised))
            if getattr(image, "b64_json", None):
                parts.append(ReplyPart(inline_data=image.b64_json, mime_type="image/png"))
        return GenerationReply(parts=parts)
