"""Generation backend: text and images through the OpenAI API.

Anything exposing the same three coroutines (generate_text, generate_image,
generate_images) can stand in for BackendClient, which is how the tests run
without network access.
"""
from __future__ import annotations
import logging
from typing import List, Optional

from openai import AsyncOpenAI, OpenAIError

from studio.domain.errors import BackendRequestFailure
from studio.utilities.config import EXERCISE_IMAGE_RATIO, IMAGE_SIZE_BY_RATIO, StudioConfig

logger = logging.getLogger(__name__)

IMAGE_MIME = "image/jpeg"


def to_data_uri(b64_payload: str, mime: str = IMAGE_MIME) -> str:
    return f"data:{mime};base64,{b64_payload}"


class BackendClient:
    def __init__(self, config: StudioConfig, client: Optional[AsyncOpenAI] = None):
        self.config = config
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        """Return the OpenAI client, creating it on first use."""
        if self._client is None:
            if not self.config.api_key:
                logger.warning("OPENAI_API_KEY not set, cannot reach the generation backend.")
                raise BackendRequestFailure("OPENAI_API_KEY not set")
            self._client = AsyncOpenAI(api_key=self.config.api_key, timeout=self.config.request_timeout)
        return self._client

    async def generate_text(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = await client.responses.create(model=self.config.text_model, input=prompt)
        except OpenAIError as e:
            logger.exception("Text generation request failed")
            raise BackendRequestFailure(str(e)) from e
        text = (response.output_text or "").strip()
        if not text:
            logger.warning("Backend returned empty text for plan request")
            raise BackendRequestFailure("empty text response")
        return text

    async def _images(self, prompt: str, aspect_ratio: str) -> List[str]:
        client = self._get_client()
        size = IMAGE_SIZE_BY_RATIO.get(aspect_ratio)
        if size is None:
            raise ValueError(f"Unsupported aspect ratio: {aspect_ratio}")
        try:
            response = await client.images.generate(
                model=self.config.image_model,
                prompt=prompt,
                n=1,
                size=size,
                output_format="jpeg",
            )
        except OpenAIError as e:
            raise BackendRequestFailure(str(e)) from e
        return [to_data_uri(item.b64_json) for item in (response.data or []) if getattr(item, "b64_json", None)]

    async def generate_images(self, prompt: str, aspect_ratio: str) -> List[str]:
        """One image for the given ratio, as a list of data URIs (empty when declined)."""
        return await self._images(prompt, aspect_ratio)

    async def generate_image(self, query: str) -> Optional[str]:
        """Illustration for one exercise; None when the backend returned no image."""
        images = await self._images(query, EXERCISE_IMAGE_RATIO)
        return images[0] if images else None


__all__ = ["BackendClient", "to_data_uri"]
