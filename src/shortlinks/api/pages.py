from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from shortlinks.api.deps import get_base_url, get_link_service
from shortlinks.core.errors import GenerationError, StoreError, ValidationError
from shortlinks.services.links import LinkService, build_short_url

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

INVALID_INPUT = "Invalid input. Please enter your url."
URL_REQUIRED = "Enter long url to shorten"
COULD_NOT_GENERATE = "Could not generate short URL. Please try again."
COULD_NOT_SAVE = "Could not save your URL. Please try again."


def _render(request: Request, status_code: int = 200, **context) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return _render(request)


@router.post("/", response_class=HTMLResponse)
async def create_short_url(
    request: Request,
    service: LinkService = Depends(get_link_service),
    base_url: str = Depends(get_base_url),
):
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(FORM_CONTENT_TYPES):
        return _render(request, 400, error=INVALID_INPUT)

    try:
        form = await request.form()
    except (HTTPException, MultiPartException):
        # unparseable body, e.g. multipart without a boundary
        return _render(request, 400, error=INVALID_INPUT)

    long_url = form.get("long_url", "")
    if not isinstance(long_url, str):
        # e.g. a file upload under the long_url name
        return _render(request, 400, error=INVALID_INPUT)

    try:
        code = await run_in_threadpool(service.shorten, long_url)
    except ValidationError:
        return _render(request, 400, error=URL_REQUIRED)
    except GenerationError:
        logger.exception("Short code generation failed")
        return _render(request, 500, error=COULD_NOT_GENERATE, long_url=long_url)
    except StoreError:
        logger.exception("DB insert failed")
        return _render(request, 500, error=COULD_NOT_SAVE, long_url=long_url)

    return _render(request, message="short url", short_url=build_short_url(base_url, code))
