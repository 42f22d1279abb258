from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..models.organizer import Organizer
from ..services.auth_service import Account, AuthService
from ..schemas.auth import LoginRequest, LoginResponse
from ..schemas.organizer import OrganizerResponse
from ..schemas.user import UserResponse
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import get_current_account

router = APIRouter(tags=["authentication"])


@router.post("/login", response_model=Dict[str, Any])
@handle_service_errors
async def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Sign in as a user, admin or approved organizer"""
    result = AuthService(db).login(login_data.email, login_data.password)

    return RouterResponse.success(
        data=LoginResponse(
            token=result.token,
            email=result.account.email,
            role=result.role,
            name=result.name,
            user_id=result.account_id,
        ),
        message="Login successful",
    )


@router.get("/profile", response_model=Dict[str, Any])
@handle_service_errors
async def get_profile(account: Account = Depends(get_current_account)):
    """Current account's profile, with its role"""
    if isinstance(account, Organizer):
        profile = RouterResponse.success(OrganizerResponse.model_validate(account))
    else:
        profile = RouterResponse.success(UserResponse.model_validate(account))

    profile["data"]["role"] = AuthService.role_of(account)
    return profile
