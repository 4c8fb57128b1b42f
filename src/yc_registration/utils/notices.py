"""One-shot user notices carried in the session between redirects"""

from fastapi import Request

NOTICES_KEY = "notices"


def add_notice(
    request: Request, title: str, description: str = "", variant: str = "default"
) -> None:
    """Queue a notice for the next rendered page ("default" or "destructive")"""
    notices = request.session.get(NOTICES_KEY, [])
    notices.append({"title": title, "description": description, "variant": variant})
    request.session[NOTICES_KEY] = notices


def pop_notices(request: Request) -> list[dict]:
    return request.session.pop(NOTICES_KEY, [])
