"""Ingredient recognition API routes.

Both endpoints answer 200 with ``recognized: false`` when nothing was found,
so clients can tell "no ingredients" apart from a failed analysis.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from ingredient_api.api.dependencies import (
    CatalogRecognitionServiceDep,
    RecognitionServiceDep,
)
from ingredient_api.models import RecognitionResponse
from ingredient_api.services.recognition import MAX_IMAGE_BYTES, validate_image

router = APIRouter()
logger = logging.getLogger(__name__)


async def read_image(image: UploadFile) -> bytes:
    """Read an upload, enforcing the size limit."""
    content = await image.read(MAX_IMAGE_BYTES + 1)
    return validate_image(content)


@router.post("", response_model=RecognitionResponse)
async def recognize_ingredients(
    service: RecognitionServiceDep,
    image: Annotated[UploadFile, File(description="Photo of the ingredients")],
    language: Annotated[str, Form(description="Prompt language (en, it)")] = "en",
) -> RecognitionResponse:
    """
    Recognize ingredients with the vision model pipeline.
    """
    image_data = await read_image(image)
    logger.info(
        f"Recognition request: {image.filename} ({len(image_data)} bytes, language={language})"
    )
    return await service.recognize_detailed(image_data, language)


@router.post("/catalog", response_model=RecognitionResponse)
async def recognize_with_catalog(
    service: CatalogRecognitionServiceDep,
    image: Annotated[UploadFile, File(description="Photo of the ingredients")],
) -> RecognitionResponse:
    """
    Recognize ingredients with the tagger + reference catalog pipeline.
    """
    image_data = await read_image(image)
    logger.info(f"Catalog recognition request: {image.filename} ({len(image_data)} bytes)")
    return await service.recognize_detailed(image_data)
