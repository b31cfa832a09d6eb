from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.app.config import get_settings
from src.app.dependencies import get_business_registry
from src.app.routes import RESERVATION_PATH, router
from src.schemas.reservation import ReservationOutcome
from src.services.reservation import INVALID_DETAILS
from src.utils.logging import configure_logging

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)
get_business_registry()

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(router)


@app.exception_handler(RequestValidationError)
async def reservation_validation_handler(request: Request, exc: RequestValidationError):
    # webhook callers always get an outcome body, never a 422
    if request.url.path != RESERVATION_PATH:
        return await request_validation_exception_handler(request, exc)
    logger.info("Rejecting malformed reservation payload: %s", exc.errors())
    outcome = ReservationOutcome(success=False, message=INVALID_DETAILS)
    return JSONResponse(status_code=200, content=outcome.model_dump(mode="json", exclude_none=True))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
