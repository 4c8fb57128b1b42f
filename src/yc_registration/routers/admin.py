"""Admin login and registration dashboard"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from yc_registration.auth.admin_session import (
    AdminSession,
    get_admin_session,
    require_admin_session,
)
from yc_registration.backends.registration_store import RegistrationStore, StoreError
from yc_registration.models.database import get_dashboard_store
from yc_registration.services.dashboard_filter import (
    AgeFilter,
    GenderFilter,
    filter_registrations,
    parse_age_filter,
    parse_gender_filter,
    summarize,
)
from yc_registration.templating import templates
from yc_registration.utils.notices import add_notice

router = APIRouter(prefix="/admin", include_in_schema=False)

logger = logging.getLogger(__name__)


@router.get("/login")
async def login_page(
    request: Request, admin: AdminSession = Depends(get_admin_session)
):
    if admin.is_authenticated:
        return RedirectResponse(url="/admin/dashboard", status_code=303)
    return templates.TemplateResponse(request, "admin_login.html", {})


@router.post("/login")
async def login(request: Request, admin: AdminSession = Depends(get_admin_session)):
    form_data = await request.form()
    username = str(form_data.get("username", ""))
    password = str(form_data.get("password", ""))

    if not admin.login(username, password):
        add_notice(
            request,
            "Login Failed",
            "Invalid username or password",
            variant="destructive",
        )
        return RedirectResponse(url="/admin/login", status_code=303)

    add_notice(request, "Login Successful", "Welcome to the admin dashboard!")
    return RedirectResponse(url="/admin/dashboard", status_code=303)


@router.post("/logout")
async def logout(request: Request, admin: AdminSession = Depends(get_admin_session)):
    admin.logout()
    add_notice(request, "Logged Out", "You have been successfully logged out.")
    return RedirectResponse(url="/", status_code=303)


@router.get("/dashboard", dependencies=[Depends(require_admin_session)])
async def dashboard(
    request: Request,
    q: Optional[str] = None,
    age: Optional[str] = None,
    gender: Optional[str] = None,
    store: RegistrationStore = Depends(get_dashboard_store),
):
    """List registrations with search, age and gender filters"""
    age_filter = parse_age_filter(age)
    gender_filter = parse_gender_filter(gender)

    load_error = False
    try:
        registrations = await store.list_all()
    except StoreError as e:
        logger.error(f"Failed to load registrations for dashboard: {e}")
        add_notice(request, "Error loading data", str(e), variant="destructive")
        registrations = []
        load_error = True

    filtered = filter_registrations(registrations, q, age_filter, gender_filter)

    return templates.TemplateResponse(
        request,
        "admin_dashboard.html",
        {
            "registrations": filtered,
            "stats": summarize(registrations),
            "search_term": q or "",
            "age_filter": age_filter,
            "gender_filter": gender_filter,
            "age_filters": AgeFilter,
            "gender_filters": GenderFilter,
            "load_error": load_error,
        },
    )


@router.get("/registration/{registration_id}", dependencies=[Depends(require_admin_session)])
async def registration_details(
    request: Request,
    registration_id: str,
    store: RegistrationStore = Depends(get_dashboard_store),
):
    """Full details of one registration"""
    load_error = False
    try:
        registration = await store.find_by_id(registration_id)
    except StoreError as e:
        logger.error(f"Failed to load registration {registration_id}: {e}")
        add_notice(request, "Error loading data", str(e), variant="destructive")
        registration = None
        load_error = True

    if registration is None:
        return templates.TemplateResponse(
            request,
            "registration_not_found.html",
            {"registration_id": registration_id, "load_error": load_error},
            status_code=(
                status.HTTP_503_SERVICE_UNAVAILABLE
                if load_error
                else status.HTTP_404_NOT_FOUND
            ),
        )

    return templates.TemplateResponse(
        request, "registration_details.html", {"registration": registration}
    )
