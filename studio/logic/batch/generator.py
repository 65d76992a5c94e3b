"""Concurrent ad image batch: one request per format, all-or-nothing.

All requests are fired together and awaited as a group; results are joined
by format index, not by arrival order. If any format comes back empty (or its
request fails) the whole batch fails with that format's label.
"""
from __future__ import annotations
import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

from studio.domain.BatchImage import AdFormat, BatchImage
from studio.domain.errors import BatchPartialFailure
from studio.logic.prompts.builder import build_format_prompt

logger = logging.getLogger(__name__)


class ImageBatchBackend(Protocol):
    async def generate_images(self, prompt: str, aspect_ratio: str) -> List[str]: ...


async def generate_batch(backend: ImageBatchBackend, base_prompt: str,
                         formats: Sequence[AdFormat], title: Optional[str] = None) -> List[BatchImage]:
    requests = [
        backend.generate_images(build_format_prompt(base_prompt, ad_format), ad_format.ratio)
        for ad_format in formats
    ]
    results = await asyncio.gather(*requests, return_exceptions=True)

    images: List[BatchImage] = []
    for ad_format, result in zip(formats, results):
        if isinstance(result, Exception):
            logger.error("Image request for format %s failed: %s", ad_format.name, result)
            raise BatchPartialFailure(ad_format.name, reason="backend") from result
        if not result or not result[0]:
            logger.error("Image request for format %s returned no image", ad_format.name)
            raise BatchPartialFailure(ad_format.name)
        images.append(BatchImage(
            src=result[0],
            format=ad_format.name,
            ratio=ad_format.ratio,
            download_name=BatchImage.file_name_for(title, ad_format.name) if title else "",
        ))
    return images


__all__ = ["generate_batch", "ImageBatchBackend"]
