"""
Google Gemini provider for ingredient recognition.

Sends the image inline with a language-specific prompt and parses the JSON
array the model returns. Owns the retry/backoff policy and the fallback to
a secondary model when the primary one is not available.
"""

import base64
import logging

import httpx

from ingredient_api.core.exceptions import (
    ModelNotFound,
    ParseError,
    RateLimited,
    RecognitionError,
    UpstreamUnavailable,
)
from ingredient_api.models import IngredientSource
from ingredient_api.prompts import get_prompt

from .base import VisionAnalysis, VisionAnalysisService, detect_mime_type
from .parser import parse_candidates
from .retry import ErrorKind, RetryPolicy, classify_status

logger = logging.getLogger(__name__)


class GeminiVisionClient(VisionAnalysisService):
    """
    Ingredient recognition using the Gemini generateContent endpoint.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        primary_model: str = "gemini-2.5-pro",
        fallback_model: str = "gemini-1.5-flash",
        timeout: float = 30.0,
        fallback_timeout: float = 25.0,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """
        Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            base_url: API base URL
            primary_model: Model tried first, with retries
            fallback_model: Model tried once if the primary returns 404
            timeout: Per-call timeout for the primary model in seconds
            fallback_timeout: Per-call timeout for the fallback model in seconds
            retry_policy: Attempt budget and backoff schedule
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.primary_model = primary_model
        self.fallback_model = fallback_model
        self.timeout = timeout
        self.fallback_timeout = fallback_timeout
        self.retry_policy = retry_policy or RetryPolicy()
        self._client: httpx.AsyncClient | None = None

    @property
    def provider_name(self) -> str:
        return f"gemini/{self.primary_model}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_request(self, prompt: str, image_data: bytes) -> dict:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {
                            "inline_data": {
                                "mime_type": detect_mime_type(image_data),
                                "data": base64.b64encode(image_data).decode("utf-8"),
                            }
                        },
                    ]
                }
            ]
        }

    async def _post(
        self, model: str, body: dict, timeout: float
    ) -> httpx.Response:
        client = await self._get_client()
        return await client.post(
            f"/models/{model}:generateContent",
            params={"key": self.api_key},
            json=body,
            timeout=httpx.Timeout(timeout),
        )

    @staticmethod
    def _response_text(response: httpx.Response, provider: str) -> str:
        try:
            data = response.json()
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ParseError(
                "No text response from Gemini",
                provider=provider,
                details={"error": str(e)},
            ) from e

    async def analyze_detailed(self, image_data: bytes, language: str = "en") -> VisionAnalysis:
        """
        Recognize ingredients, retrying transient failures.

        Network errors, 503 and 429 are retried with linear backoff up to the
        policy's attempt budget. A 404 abandons retries and switches to the
        fallback model. Any other status fails immediately.
        """
        if not self.api_key:
            raise UpstreamUnavailable("Gemini API key not configured", provider=self.provider_name)

        body = self._build_request(get_prompt(language), image_data)
        max_attempts = self.retry_policy.max_attempts
        last_error: RecognitionError | None = None

        for attempt in range(1, max_attempts + 1):
            logger.info(f"Gemini {self.primary_model} attempt {attempt}/{max_attempts}")
            try:
                response = await self._post(self.primary_model, body, self.timeout)
            except httpx.RequestError as e:
                last_error = UpstreamUnavailable(
                    f"Failed to connect to Gemini: {e}",
                    provider=self.provider_name,
                    details={"attempt": attempt},
                )
                if await self.retry_policy.wait(attempt, ErrorKind.NETWORK):
                    continue
                break

            if response.is_success:
                text = self._response_text(response, self.provider_name)
                candidates = parse_candidates(text, provider=self.provider_name)
                logger.info(
                    f"Gemini {self.primary_model} found {len(candidates)} candidates "
                    f"on attempt {attempt}"
                )
                return VisionAnalysis(
                    candidates=candidates,
                    source=IngredientSource.PRIMARY_MODEL,
                    model=self.primary_model,
                    attempts=attempt,
                    raw_response=text,
                )

            kind = classify_status(response.status_code)
            details = {"status_code": response.status_code, "attempt": attempt}

            if kind == ErrorKind.MODEL_NOT_FOUND:
                logger.info(
                    f"Gemini {self.primary_model} not available, "
                    f"falling back to {self.fallback_model}"
                )
                return await self._analyze_with_fallback(image_data, language)

            if kind == ErrorKind.OVERLOADED:
                last_error = UpstreamUnavailable(
                    f"Gemini {self.primary_model} overloaded (503)",
                    provider=self.provider_name,
                    details=details,
                )
            elif kind == ErrorKind.RATE_LIMITED:
                last_error = RateLimited(
                    f"Gemini {self.primary_model} rate limited (429)",
                    provider=self.provider_name,
                    details=details,
                )
            else:
                raise RecognitionError(
                    message=f"Gemini API error: {response.status_code}",
                    error_code="PROVIDER_ERROR",
                    provider=self.provider_name,
                    status_code=502,
                    details={**details, "body": response.text[:500]},
                )

            if not await self.retry_policy.wait(attempt, kind):
                break

        logger.error(f"Gemini {self.primary_model} failed after retries: {last_error.message}")
        raise last_error

    async def _analyze_with_fallback(self, image_data: bytes, language: str) -> VisionAnalysis:
        """Single attempt against the secondary model with a shorter timeout."""
        provider = f"gemini/{self.fallback_model}"
        body = self._build_request(get_prompt(language, fallback=True), image_data)

        try:
            response = await self._post(self.fallback_model, body, self.fallback_timeout)
        except httpx.RequestError as e:
            raise UpstreamUnavailable(
                f"Failed to connect to Gemini fallback: {e}", provider=provider
            ) from e

        if not response.is_success:
            kind = classify_status(response.status_code)
            details = {"status_code": response.status_code}
            message = f"Gemini fallback error: {response.status_code}"
            if kind == ErrorKind.RATE_LIMITED:
                raise RateLimited(message, provider=provider, details=details)
            if kind == ErrorKind.MODEL_NOT_FOUND:
                raise ModelNotFound(message, provider=provider, details=details)
            raise UpstreamUnavailable(message, provider=provider, details=details)

        text = self._response_text(response, provider)
        candidates = parse_candidates(text, provider=provider)
        logger.info(f"Gemini fallback {self.fallback_model} found {len(candidates)} candidates")
        return VisionAnalysis(
            candidates=candidates,
            source=IngredientSource.FALLBACK_MODEL,
            model=self.fallback_model,
            raw_response=text,
        )

    async def health_check(self) -> bool:
        """Check that credentials are accepted by listing the primary model."""
        if not self.api_key:
            return False
        try:
            client = await self._get_client()
            response = await client.get(
                f"/models/{self.primary_model}",
                params={"key": self.api_key},
                timeout=httpx.Timeout(5.0),
            )
            return response.status_code == 200
        except Exception as e:
            logger.error(f"Gemini health check failed: {e}")
            return False
