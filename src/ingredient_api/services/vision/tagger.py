"""
Generic object tagger client.

Talks to a RecognizeAnything-style service: the image is uploaded as a
multipart file and the response lists free-form tags, possibly in several
languages. Tags carry no confidence, so position in the list is used.
"""

import logging

import httpx

from ingredient_api.core.exceptions import UpstreamUnavailable
from ingredient_api.models import IngredientSource, RawCandidate

from .base import VisionAnalysis, VisionAnalysisService, detect_mime_type

logger = logging.getLogger(__name__)

# Position-based confidence: max(FLOOR, 1 - i * STEP) * SCALE
TAG_CONFIDENCE_FLOOR = 0.5
TAG_CONFIDENCE_STEP = 0.1
TAG_CONFIDENCE_SCALE = 0.8


class TaggerClient(VisionAnalysisService):
    """Client for the generic image tagging service."""

    def __init__(self, base_url: str, timeout: float = 15.0) -> None:
        """
        Initialize the tagger client.

        Args:
            base_url: Base URL of the tagging service (e.g. "http://localhost:8000")
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def provider_name(self) -> str:
        return "tagger"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def tag(self, image_data: bytes) -> list[str]:
        """
        Get raw tags for an image.

        Returns:
            Tags from the ``tags``, ``english`` and ``chinese`` lists, in that
            order, without blanks or duplicates

        Raises:
            UpstreamUnavailable: If the service cannot be reached or errors
        """
        client = await self._get_client()
        files = {"file": ("image", image_data, detect_mime_type(image_data))}

        try:
            response = await client.post("/", files=files)
        except httpx.RequestError as e:
            raise UpstreamUnavailable(
                f"Failed to connect to tagger: {e}", provider=self.provider_name
            ) from e

        if not response.is_success:
            raise UpstreamUnavailable(
                f"Tagger API error: {response.status_code}",
                provider=self.provider_name,
                details={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailable(
                "Tagger returned a non-JSON body", provider=self.provider_name
            ) from e

        tags: list[str] = []
        seen: set[str] = set()
        for key in ("tags", "english", "chinese"):
            for tag in data.get(key) or []:
                if not isinstance(tag, str):
                    continue
                tag = tag.strip()
                if tag and tag not in seen:
                    seen.add(tag)
                    tags.append(tag)

        logger.info(f"Tagger returned {len(tags)} tags")
        return tags

    @staticmethod
    def to_candidates(tags: list[str]) -> list[RawCandidate]:
        """Assign position-based confidence to tags."""
        return [
            RawCandidate(
                name=tag,
                confidence=max(TAG_CONFIDENCE_FLOOR, 1 - index * TAG_CONFIDENCE_STEP)
                * TAG_CONFIDENCE_SCALE,
            )
            for index, tag in enumerate(tags)
        ]

    async def analyze_detailed(self, image_data: bytes, language: str = "en") -> VisionAnalysis:
        tags = await self.tag(image_data)
        return VisionAnalysis(
            candidates=self.to_candidates(tags),
            source=IngredientSource.TAGGER,
            model=self.provider_name,
        )

    async def health_check(self) -> bool:
        """Tagger is healthy if it answers OPTIONS without a server error."""
        try:
            client = await self._get_client()
            response = await client.options("/", timeout=httpx.Timeout(5.0))
            return response.status_code < 500
        except Exception as e:
            logger.warning(f"Tagger health check failed: {e}")
            return False
