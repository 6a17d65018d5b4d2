"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, File, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nutrient_estimator.api.models import (
    DishNameRequest,
    EstimateRequest,
    PhotoRequest,
    RescaleRequest,
)
from nutrient_estimator.app_logging import configure_logging
from nutrient_estimator.containers import AppContainer
from nutrient_estimator.domain.errors import (
    EngineError,
    ExtractionError,
    InputValidationError,
    NutrientEstimatorError,
)
from nutrient_estimator.services.images import to_data_url
from nutrient_estimator.services.portions import rescale

_ERROR_STATUS: dict[type[NutrientEstimatorError], int] = {
    InputValidationError: status.HTTP_400_BAD_REQUEST,
    ExtractionError: 422,
    EngineError: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(NutrientEstimatorError)
    async def handle_estimator_error(
        request: Request, exc: NutrientEstimatorError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.info(
            "%s %s -> %s: %s", request.method, request.url.path, status_code, exc
        )
        return _error(str(exc), status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_body(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            return _error("Invalid JSON in request body.", status.HTTP_400_BAD_REQUEST)
        return _error("Invalid request body.", status.HTTP_400_BAD_REQUEST)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/estimate", response_model=None)
    async def estimate(
        body: EstimateRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Estimate a dish from a photo data URI or a dish name."""
        estimator = _container(request).estimator
        if body.photo_data_uri:
            record = await estimator.estimate_from_photo(body.photo_data_uri)
        elif body.dish_name:
            record = await estimator.estimate_from_text(body.dish_name)
        else:
            return _error(
                "Missing photoDataUri or dishName in request body",
                status.HTTP_400_BAD_REQUEST,
            )
        return record.model_dump()

    @app.post("/estimate/dish", response_model=None)
    async def estimate_dish(
        request: Request, photo: UploadFile | None = File(default=None)
    ) -> dict[str, object] | JSONResponse:
        """Estimate a dish from an uploaded photo."""
        photo_data_uri = await _upload_to_data_url(photo)
        if photo_data_uri is None:
            return _error("Missing photo in form data", status.HTTP_400_BAD_REQUEST)
        record = await _container(request).estimator.estimate_from_photo(photo_data_uri)
        return record.model_dump()

    @app.post("/estimate/text", response_model=None)
    async def estimate_text(
        body: DishNameRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Estimate a dish from its name."""
        if not body.dish_name:
            return _error(
                "Missing dishName in request body", status.HTTP_400_BAD_REQUEST
            )
        record = await _container(request).estimator.estimate_from_text(body.dish_name)
        return record.model_dump()

    @app.post("/extract", response_model=None)
    async def extract(
        body: PhotoRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Extract label nutrients from a photo data URI."""
        if not body.photo_data_uri:
            return _error(
                "Missing photoDataUri in request body", status.HTTP_400_BAD_REQUEST
            )
        estimator = _container(request).estimator
        record = await estimator.extract_from_label_photo(body.photo_data_uri)
        return record.model_dump()

    @app.post("/extract/label", response_model=None)
    async def extract_label(
        request: Request, photo: UploadFile | None = File(default=None)
    ) -> dict[str, object] | JSONResponse:
        """Extract label nutrients from an uploaded photo."""
        photo_data_uri = await _upload_to_data_url(photo)
        if photo_data_uri is None:
            return _error("Missing photo in form data", status.HTTP_400_BAD_REQUEST)
        estimator = _container(request).estimator
        record = await estimator.extract_from_label_photo(photo_data_uri)
        return record.model_dump()

    @app.post("/rescale")
    async def rescale_record(body: RescaleRequest) -> dict[str, float]:
        """Rescale a nutrition record to the grams actually eaten."""
        if body.consumed_grams is None:
            raise InputValidationError("Missing consumedGrams in request body")
        return asdict(rescale(body.record, body.consumed_grams))

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _status_for(exc: NutrientEstimatorError) -> int:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _upload_to_data_url(photo: UploadFile | None) -> str | None:
    """Convert an uploaded file to a data URL, or None when nothing was sent."""
    if photo is None:
        return None
    content = await photo.read()
    if not content:
        return None
    mime_type = photo.content_type
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = None
    return to_data_url(content, mime_type)
