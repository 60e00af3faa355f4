from fastapi import APIRouter, Depends

from mockprep.core.auth_dependency import get_current_user
from mockprep.db.models.user import User
from mockprep.schemas.auth import UserResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


# ✅ CURRENT USER (created on first authenticated contact)
@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return UserResponse(
        id=user.id,
        external_id=user.external_id,
        email=user.email or "",
        name=user.name,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
