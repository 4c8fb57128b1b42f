"""Static pages"""

from fastapi import APIRouter, Request

from yc_registration.templating import templates

router = APIRouter(include_in_schema=False)


@router.get("/")
async def landing(request: Request):
    """Serve the landing page"""
    return templates.TemplateResponse(request, "landing.html", {})
