import json

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from pymongo.asynchronous.collection import AsyncCollection

from app.core.db import get_complaints_collection
from app.utils.check_roles import require_admin
from app.schemas.auth.auth_schemas import SessionUser
from app.schemas.support.complaint_schemas import (
    ComplaintStatusUpdate,
    ComplaintActionResponse,
)
from app.services.support.complaint_service import (
    update_complaint,
    delete_complaint,
)

router = APIRouter(prefix="/complaints", tags=["Complaints"])


async def status_update_body(
    request: Request,
    current_user: SessionUser = Depends(require_admin),
) -> ComplaintStatusUpdate:
    # Read only once the caller is known to be an admin.
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": str(exc), "input": None}]
        )

    try:
        return ComplaintStatusUpdate.model_validate(body)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False))


@router.put("/{complaint_id}", response_model=ComplaintActionResponse)
async def update_complaint_api(
    complaint_id: str,
    current_user: SessionUser = Depends(require_admin),
    payload: ComplaintStatusUpdate = Depends(status_update_body),
    collection: AsyncCollection = Depends(get_complaints_collection),
):
    return await update_complaint(collection, complaint_id, payload, current_user)


@router.delete("/{complaint_id}", response_model=ComplaintActionResponse)
async def delete_complaint_api(
    complaint_id: str,
    current_user: SessionUser = Depends(require_admin),
    collection: AsyncCollection = Depends(get_complaints_collection),
):
    return await delete_complaint(collection, complaint_id, current_user)
