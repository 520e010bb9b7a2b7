from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import CallerContext, AuthenticationError
from ...api.deps import get_current_caller, rate_limit_check
from ...repositories.user_repository import UserRepository
from ...services.auth_service import AuthService
from ...schemas.auth import UserLogin, TokenResponse, UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Authenticate user and return an access token."""
    auth_service = AuthService(db)
    return auth_service.authenticate_user(login_data)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    caller: CallerContext = Depends(get_current_caller),
    db: Session = Depends(get_db)
):
    """Get current user information."""
    user = UserRepository(db).get_by_id(caller.user_id)
    if not user:
        raise AuthenticationError("User not found")
    return UserResponse.model_validate(user)
