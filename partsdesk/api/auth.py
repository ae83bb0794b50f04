# partsdesk/api/auth.py

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..models.users import User
from ..services.auth import INVALID_LOGIN_MESSAGE
from ..services.state import DeskState
from .deps import get_desk, require_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    user_id: str
    password: str


@router.post("/login", response_model=User)
def login(request: LoginRequest, desk: DeskState = Depends(get_desk)):
    user = desk.login(request.user_id, request.password)
    if user is None:
        raise HTTPException(status_code=401, detail=INVALID_LOGIN_MESSAGE)
    return user


@router.post("/logout")
def logout(desk: DeskState = Depends(get_desk)):
    desk.logout()
    return {"status": "signed_out"}


@router.get("/me", response_model=User)
def me(user: User = Depends(require_user)):
    return user
