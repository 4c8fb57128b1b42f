"""JSON collection endpoint consumed by remote dashboards"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from yc_registration.auth.admin_session import require_admin_api
from yc_registration.backends.registration_store import RegistrationStore, StoreError
from yc_registration.models.database import get_registration_store

router = APIRouter(prefix="/api", tags=["Registrations"])

logger = logging.getLogger(__name__)


@router.get(
    "/registrations",
    summary="List registrations",
    description="All submitted registrations as a JSON array, oldest first",
    dependencies=[Depends(require_admin_api)],
)
async def list_registrations(
    store: RegistrationStore = Depends(get_registration_store),
) -> list[dict]:
    try:
        registrations = await store.list_all()
    except StoreError as e:
        logger.error(f"Failed to list registrations: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        )
    return [registration.to_json_dict() for registration in registrations]
