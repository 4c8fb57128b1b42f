"""Registration wizard endpoints"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from redis.exceptions import RedisError

from yc_registration.backends.registration_store import RegistrationStore, StoreError
from yc_registration.models.database import (
    get_registration_store,
    get_wizard_state_manager,
)
from yc_registration.models.registration import Gender, GuardianRelationship
from yc_registration.models.wizard import STEP_LABELS, WizardState, WizardStep
from yc_registration.services.wizard_controller import (
    InvalidTransitionError,
    WizardController,
)
from yc_registration.services.wizard_state_manager import WizardStateManager
from yc_registration.templating import templates
from yc_registration.utils.notices import add_notice

router = APIRouter(include_in_schema=False)

logger = logging.getLogger(__name__)

WIZARD_SESSION_KEY = "wizard_id"
LAST_REGISTRATION_KEY = "last_registration_id"

GUARDIAN_RELATIONSHIP_LABELS = {
    GuardianRelationship.PARENT: "Parent",
    GuardianRelationship.GUARDIAN: "Legal Guardian",
    GuardianRelationship.GRANDPARENT: "Grandparent",
    GuardianRelationship.OTHER: "Other",
}


def _wizard_id(request: Request) -> str:
    """Wizard id for this browser session, created on first visit"""
    wizard_id = request.session.get(WIZARD_SESSION_KEY)
    if not wizard_id:
        wizard_id = WizardStateManager.new_wizard_id()
        request.session[WIZARD_SESSION_KEY] = wizard_id
    return wizard_id


def _incomplete_notice(request: Request):
    add_notice(
        request,
        "Please fill all required fields",
        "Complete all mandatory fields before proceeding.",
        variant="destructive",
    )


def _back_to_wizard() -> RedirectResponse:
    return RedirectResponse(url="/register", status_code=303)


@router.get("/register")
async def registration_form(
    request: Request,
    state_manager: WizardStateManager = Depends(get_wizard_state_manager),
):
    """Render the current wizard step"""
    wizard_id = _wizard_id(request)
    state = await state_manager.get_state(wizard_id)
    if state.is_submitted:
        state = WizardState()

    controller = WizardController(state)

    return templates.TemplateResponse(
        request,
        "register.html",
        {
            "step": state.current_step,
            "steps": WizardStep,
            "step_labels": STEP_LABELS,
            "progress": controller.progress(),
            "progress_percent": controller.progress_percent(),
            "is_under18": state.is_under18,
            "values": state.values,
            "errors": state.field_errors,
            "genders": list(Gender),
            "guardian_relationships": GUARDIAN_RELATIONSHIP_LABELS,
        },
    )


@router.post("/register")
async def registration_step(
    request: Request,
    state_manager: WizardStateManager = Depends(get_wizard_state_manager),
    store: RegistrationStore = Depends(get_registration_store),
):
    """Apply one wizard action: next, back or submit"""
    wizard_id = _wizard_id(request)
    form_data = await request.form()
    action = form_data.get("action", "next")

    state = await state_manager.get_state(wizard_id)
    controller = WizardController(state)

    try:
        controller.update_values(form_data)

        if action == "back":
            controller.retreat()
        elif action == "submit":
            registration = await controller.submit(store)
            if registration is None:
                _incomplete_notice(request)
            else:
                await state_manager.clear_state(wizard_id)
                request.session.pop(WIZARD_SESSION_KEY, None)
                request.session[LAST_REGISTRATION_KEY] = registration.id
                add_notice(
                    request,
                    "Registration Successful!",
                    "Check your email for confirmation.",
                )
                return RedirectResponse(url="/confirmation", status_code=303)
        elif not controller.advance():
            _incomplete_notice(request)

    except InvalidTransitionError as e:
        logger.warning(f"Invalid wizard action '{action}' for {wizard_id}: {e}")
        add_notice(request, "Action not available", str(e), variant="destructive")
        if controller.state.is_submitted:
            await state_manager.clear_state(wizard_id)
            return _back_to_wizard()
    except StoreError as e:
        # Keep the wizard on the review step so the user can resubmit
        logger.error(f"Failed to store registration for {wizard_id}: {e}")
        add_notice(
            request,
            "Registration could not be saved",
            "Your answers are kept. Please try submitting again.",
            variant="destructive",
        )
        try:
            await state_manager.save_state(wizard_id, controller.state)
        except RedisError:
            # Same outage as the failed append; the previous snapshot stays
            logger.error(f"Could not keep review answers for {wizard_id}")
        return _back_to_wizard()

    await state_manager.save_state(wizard_id, controller.state)
    return _back_to_wizard()


@router.get("/confirmation")
async def confirmation(request: Request):
    """Post-submission confirmation page"""
    return templates.TemplateResponse(
        request,
        "confirmation.html",
        {"registration_id": request.session.get(LAST_REGISTRATION_KEY)},
    )
