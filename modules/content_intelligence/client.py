"""
Content Intelligence Client — competitor outline, draft scoring and image generation
through a remote generation service.
"""
import asyncio
import logging
from typing import List, Optional, Sequence

from config.settings import (
    DEFAULT_OUTPUT_LANGUAGE,
    DRAFT_MODEL,
    IMAGE_ASPECT_RATIO,
    IMAGE_MODEL,
    IMAGE_QUALITY,
    IMAGE_SIZE,
    IMAGE_TIMEOUT,
    OUTLINE_MODEL,
    REQUEST_TIMEOUT,
)
from core.errors import ContentIntelligenceError, RemoteCallFailure
from core.generation import GenerationBackend, GenerationReply, GenerationRequest
from core.models import ArticleOutline, DraftAnalysis, DraftAnalysisRequest, ImageStrategy, OutlineRequest
from core.openai_client import OpenAIClient
from modules.content_intelligence.parser import (
    extract_image_data_uri,
    load_json_object,
    parse_draft_analysis,
    parse_outline,
)
from modules.content_intelligence.prompts import (
    DRAFT_ANALYSIS_SCHEMA,
    OUTLINE_SCHEMA,
    build_draft_prompt,
    build_image_prompt,
    build_outline_prompt,
)

logger = logging.getLogger(__name__)


class ContentIntelligenceClient:
    """Sole boundary between the application and the remote generation service.

    Every operation is one stateless request/response round trip. Nothing is
    retried and nothing is cached; failures surface as ``ContentIntelligenceError``
    subclasses (see ``core.errors``).
    """

    def __init__(
        self,
        api_key: str = "",
        backend: Optional[GenerationBackend] = None,
        outline_model: str = OUTLINE_MODEL,
        draft_model: str = DRAFT_MODEL,
        image_model: str = IMAGE_MODEL,
        timeout: float = REQUEST_TIMEOUT,
        image_timeout: float = IMAGE_TIMEOUT,
        language: str = DEFAULT_OUTPUT_LANGUAGE,
    ):
        if backend is None:
            if not api_key:
                raise ValueError("OPENAI_API_KEY not set. Add it to your .env file.")
            backend = OpenAIClient(api_key=api_key, timeout=max(timeout, image_timeout))
        self.backend = backend
        self.outline_model = outline_model
        self.draft_model = draft_model
        self.image_model = image_model
        self.timeout = timeout
        self.image_timeout = image_timeout
        self.language = language

    async def __aenter__(self) -> "ContentIntelligenceClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        await self.backend.close()

    # ═══════════════════════════════════════════════════════════════════════
    # Public API
    # ═══════════════════════════════════════════════════════════════════════

    async def request_competitor_analysis(
        self,
        keywords: str,
        target_region: str,
        competitor_urls: Sequence[str],
    ) -> ArticleOutline:
        """Build an SEO outline that aims to outrank the given competitor pages."""
        if isinstance(competitor_urls, str):
            raise TypeError("competitor_urls must be a sequence of URLs, not a single string")
        request = OutlineRequest(
            keywords=keywords,
            target_region=target_region,
            competitor_urls=tuple(competitor_urls),
        )
        if not request.keywords.strip():
            raise ValueError("keywords must not be empty")
        if not request.competitor_urls:
            raise ValueError("at least one competitor URL is required")

        logger.info(f"Competitor analysis for {request.keywords!r} ({len(request.competitor_urls)} URLs)")
        prompt = build_outline_prompt(
            request.keywords, request.target_region, request.competitor_urls, self.language
        )
        reply = await self._send(
            GenerationRequest(
                model=self.outline_model,
                prompt=prompt,
                response_schema=OUTLINE_SCHEMA,
                schema_name="article_outline",
            ),
            self.timeout,
        )
        outline = parse_outline(load_json_object(reply.text))
        logger.info(
            f"Outline ready: {len(outline.structure)} sections, "
            f"{len(outline.image_strategy.placements)} images, {len(outline.faqs)} FAQs"
        )
        return outline

    async def request_draft_analysis(
        self,
        outline: ArticleOutline,
        draft_text: str,
        keywords: str,
    ) -> DraftAnalysis:
        """Score a draft against a previously obtained outline."""
        if not isinstance(outline, ArticleOutline):
            raise TypeError(f"outline must be an ArticleOutline, got {type(outline).__name__}")
        request = DraftAnalysisRequest(outline=outline, draft_text=draft_text or "", keywords=keywords)

        logger.info(f"Draft analysis ({len(request.draft_text)} chars) for {request.keywords!r}")
        prompt = build_draft_prompt(request.outline, request.draft_text, request.keywords, self.language)
        reply = await self._send(
            GenerationRequest(
                model=self.draft_model,
                prompt=prompt,
                response_schema=DRAFT_ANALYSIS_SCHEMA,
                schema_name="draft_analysis",
            ),
            self.timeout,
        )
        analysis = parse_draft_analysis(load_json_object(reply.text))
        logger.info(f"Draft scored {analysis.score}/100")
        return analysis

    async def request_image_generation(self, prompt: str) -> str:
        """Generate one illustration; returns a ``data:image/png;base64,`` URI."""
        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")

        logger.info(f"Image generation: {prompt[:80]}")
        reply = await self._send(
            GenerationRequest(
                model=self.image_model,
                prompt=build_image_prompt(prompt),
                image=True,
                aspect_ratio=IMAGE_ASPECT_RATIO,
                image_size=IMAGE_SIZE,
                image_quality=IMAGE_QUALITY,
            ),
            self.image_timeout,
        )
        return extract_image_data_uri(reply.parts)

    async def request_placement_images(self, strategy: ImageStrategy) -> List[str]:
        """Generate every planned image concurrently, in placement order.
        The first failure cancels the requests still in flight and propagates."""
        tasks = [asyncio.ensure_future(self.request_image_generation(p.ai_prompt)) for p in strategy.placements]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    # ═══════════════════════════════════════════════════════════════════════
    # Internals
    # ═══════════════════════════════════════════════════════════════════════

    async def _send(self, request: GenerationRequest, timeout: float) -> GenerationReply:
        try:
            return await asyncio.wait_for(self.backend.send(request), timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"{request.model} timed out after {timeout}s")
            raise RemoteCallFailure(f"{request.model} did not answer within {timeout}s") from e
        except ContentIntelligenceError:
            raise
        except Exception as e:
            logger.warning(f"{request.model} call failed: {e}")
            raise RemoteCallFailure(f"{request.model} call failed: {e}") from e
