"""
HTML Pages

Browser-facing routes: the creation form, the confirmation page and the
preview page that forwards visitors to the target after a short delay.
Errors are rendered as pages with the matching status code.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from shortener.api.dependencies import get_link_service, short_url_for
from shortener.core.exceptions import NotFoundError, StorageError, ValidationError
from shortener.core.rate_limit import RATE_LIMITS, limiter
from shortener.services.link_service import LinkService

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(default_response_class=HTMLResponse)


def render_error(request: Request, status_code: int, message: str) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"status_code": status_code, "message": message},
        status_code=status_code,
    )


@router.get("/", include_in_schema=False)
async def index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {"form": {}, "error": None})


@router.post("/shorten", include_in_schema=False)
@limiter.limit(RATE_LIMITS["shorten"])
async def shorten(
    request: Request,
    url: str = Form(default=""),
    title: str = Form(default=""),
    description: str = Form(default=""),
    image: str = Form(default=""),
    quote: str = Form(default=""),
    service: LinkService = Depends(get_link_service),
) -> HTMLResponse:
    form = {
        "url": url,
        "title": title,
        "description": description,
        "image": image,
        "quote": quote,
    }
    try:
        link = await service.create(url, title=title, description=description, image=image, quote=quote)
    except ValidationError as e:
        return templates.TemplateResponse(
            request,
            "index.html",
            {"form": form, "error": e.reason},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except StorageError:
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "We could not save your link. Please try again later.",
        )

    return templates.TemplateResponse(
        request,
        "created.html",
        {"link": link, "short_url": short_url_for(request, link.code)},
    )


@router.get("/s/{code}", include_in_schema=False)
@limiter.limit(RATE_LIMITS["preview"])
async def preview(
    code: str,
    request: Request,
    service: LinkService = Depends(get_link_service),
) -> HTMLResponse:
    try:
        link_preview = await service.resolve_for_display(code)
    except NotFoundError:
        return render_error(
            request,
            status.HTTP_404_NOT_FOUND,
            "This short link does not exist.",
        )
    except StorageError:
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "We could not open this link right now. Please try again later.",
        )

    return templates.TemplateResponse(
        request,
        "preview.html",
        {
            "link": link_preview.link,
            "redirect_delay": link_preview.redirect_delay,
            "short_url": short_url_for(request, link_preview.link.code),
        },
    )
