"""Jinja2 templates shared by the page routers"""

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from yc_registration.config import config
from yc_registration.services.age_classifier import calculate_age
from yc_registration.utils.notices import pop_notices

template_dir = Path(__file__).parent / "templates"


def _page_context(request: Request) -> dict:
    return {
        "notices": pop_notices(request),
        "event_name": config["event_name"],
        "contact_email": config["contact_email"],
    }


templates = Jinja2Templates(directory=str(template_dir), context_processors=[_page_context])
templates.env.globals["calculate_age"] = calculate_age
