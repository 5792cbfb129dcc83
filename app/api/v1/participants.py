# app/api/v1/participants.py
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth_deps import require_participant
from app.db.session import get_db
from app.policies.rbac import Principal
from app.schemas.participants import ParticipantRegister
from app.services.participant_service import ParticipantService

router = APIRouter(prefix="/participants", tags=["participants"])


@router.post("/register", status_code=201)
def register_participant(req: ParticipantRegister, db: Session = Depends(get_db)):
    p = ParticipantService().register(
        db,
        participant_number=req.participant_number,
        full_name=req.full_name,
        email=str(req.email),
        phone=req.phone,
        gender=req.gender.value,
        age=req.age,
        occupation=req.occupation,
        event_id=req.event_id,
    )
    return {
        "success": True,
        "message": "Registration successful",
        "data": {
            "id": str(p.id),
            "participant_number": p.participant_number,
            "full_name": p.full_name,
            "email": p.email,
            "event_id": str(p.event_id) if p.event_id else None,
            "qr_code": p.qr_code_data,
        },
    }


# ✅ who can I pick (approved, same event, never myself)
@router.get("/approved")
def list_approved(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_participant),
):
    rows = ParticipantService().list_approved(db, exclude_id=uuid.UUID(principal.actor_id))
    return {
        "participants": [
            {
                "id": str(p.id),
                "participant_number": p.participant_number,
                "full_name": p.full_name,
                "gender": p.gender,
            }
            for p in rows
        ]
    }
