"""
Base classes for vision analysis services.

Every upstream recognizer (vision model, generic tagger) implements this
interface so the pipeline can fan out across them uniformly.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ingredient_api.models import IngredientSource, RawCandidate


@dataclass
class VisionAnalysis:
    """Candidates from one upstream source plus where they came from."""

    candidates: list[RawCandidate]
    source: IngredientSource
    model: str = ""
    attempts: int = 1
    raw_response: str = field(default="", repr=False)


class VisionAnalysisService(ABC):
    """Abstract base class for upstream recognizers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        ...

    @abstractmethod
    async def analyze_detailed(self, image_data: bytes, language: str = "en") -> VisionAnalysis:
        """
        Detect candidate ingredients in an image.

        Args:
            image_data: Raw image bytes (JPEG, PNG or WEBP)
            language: Language code selecting the prompt template

        Returns:
            VisionAnalysis with candidates and their source

        Raises:
            RecognitionError: If the upstream call fails
        """
        ...

    async def analyze(self, image_data: bytes, language: str = "en") -> list[RawCandidate]:
        """Detect candidate ingredients, discarding source metadata."""
        result = await self.analyze_detailed(image_data, language)
        return result.candidates

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is configured and reachable.

        Returns:
            True if the provider is ready to accept requests
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        return None


def detect_mime_type(image_data: bytes) -> str:
    """Guess the image MIME type from magic bytes, defaulting to JPEG."""
    if image_data[:8] == b"\x89PNG\r\n\x1a\n":
        return "image/png"
    if image_data[:4] == b"RIFF" and image_data[8:12] == b"WEBP":
        return "image/webp"
    if image_data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    return "image/jpeg"
