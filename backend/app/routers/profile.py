from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_user_id
from app.models import Transaction
from app.schemas import ProfileOut, ProfileUpdateIn, TransactionOut
from app.services.profile_service import get_or_create_profile, update_profile_info

router = APIRouter(prefix="/api", tags=["profile"])


@router.get("/user", response_model=ProfileOut)
def current_profile(
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    return get_or_create_profile(db, user_id)


@router.patch("/user/profile", response_model=ProfileOut)
def update_profile(
    req: ProfileUpdateIn,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """Set the speaker metadata exported alongside recordings."""
    return update_profile_info(
        db, user_id,
        age=req.age,
        gender=req.gender,
        display_name=req.display_name,
    )


@router.get("/transactions", response_model=list[TransactionOut])
def list_transactions(
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    return (
        db.query(Transaction)
        .filter(Transaction.user_id == user_id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .all()
    )
