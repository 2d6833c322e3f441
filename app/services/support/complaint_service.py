from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection

from app.core.exceptions import BadRequestException, NotFoundException
from app.models.enums.complaint_status import ComplaintStatus
from app.schemas.auth.auth_schemas import SessionUser
from app.schemas.support.complaint_schemas import (
    ComplaintStatusUpdate,
    ComplaintActionResponse,
)
from app.utils.logger import get_logger

logger = get_logger("complaints.service")


# =====================================================
# HELPERS
# =====================================================

def parse_status(value: Any) -> ComplaintStatus:
    if not value or not isinstance(value, str):
        raise BadRequestException("Invalid status")
    try:
        return ComplaintStatus(value)
    except ValueError:
        raise BadRequestException(
            "Invalid status",
            details={"allowed": [s.value for s in ComplaintStatus]},
        )


def parse_admin_notes(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise BadRequestException("Invalid admin notes")
    return value


def _document_id(complaint_id: str) -> ObjectId:
    # Malformed ids raise InvalidId and surface as internal errors.
    return ObjectId(complaint_id)


def build_status_update(
    new_status: ComplaintStatus,
    admin_notes: Optional[str],
    current_user: SessionUser,
    now: Optional[datetime] = None,
) -> dict:
    now = now or datetime.now(timezone.utc)
    return {
        "status": new_status.value,
        "adminNotes": admin_notes or "",
        "resolvedAt": now if new_status is ComplaintStatus.RESOLVED else None,
        "resolvedBy": current_user.id,
        "updatedAt": now,
    }


# =====================================================
# UPDATE STATUS
# =====================================================
async def update_complaint(
    collection: AsyncCollection,
    complaint_id: str,
    payload: ComplaintStatusUpdate,
    current_user: SessionUser,
) -> ComplaintActionResponse:
    """
    Overwrite status, notes and resolution fields of one complaint.

    Any status may follow any other. resolvedAt is only kept for
    Resolved; every other status clears it.
    """
    new_status = parse_status(payload.status)
    admin_notes = parse_admin_notes(payload.adminNotes)

    result = await collection.update_one(
        {"_id": _document_id(complaint_id)},
        {"$set": build_status_update(new_status, admin_notes, current_user)},
    )

    if result.matched_count == 0:
        logger.info("Complaint not found", extra={"complaint_id": complaint_id})
        raise NotFoundException("Complaint not found")

    logger.info(
        "Complaint updated",
        extra={
            "complaint_id": complaint_id,
            "status": new_status.value,
            "user_id": current_user.id,
        },
    )

    return ComplaintActionResponse(message="Complaint updated successfully")


# =====================================================
# DELETE (HARD)
# =====================================================
async def delete_complaint(
    collection: AsyncCollection,
    complaint_id: str,
    current_user: SessionUser,
) -> ComplaintActionResponse:

    result = await collection.delete_one({"_id": _document_id(complaint_id)})

    if result.deleted_count == 0:
        logger.info("Complaint not found", extra={"complaint_id": complaint_id})
        raise NotFoundException("Complaint not found")

    logger.info(
        "Complaint deleted",
        extra={"complaint_id": complaint_id, "user_id": current_user.id},
    )

    return ComplaintActionResponse(message="Complaint deleted successfully")
