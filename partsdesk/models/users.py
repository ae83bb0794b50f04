from enum import Enum

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    ADMIN = "Admin"
    USER = "User"


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user_name: str
    role: Role = Role.USER
