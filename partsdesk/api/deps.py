# partsdesk/api/deps.py

from fastapi import Depends, HTTPException, Request

from ..models.users import User
from ..services.state import DeskState


def get_desk(request: Request) -> DeskState:
    return request.app.state.desk


def require_user(desk: DeskState = Depends(get_desk)) -> User:
    if desk.current_user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return desk.current_user
