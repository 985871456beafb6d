from pydantic import BaseModel
from typing import Optional

from pdv.models.users import Role

class UserBase(BaseModel):
    username: str
    full_name: Optional[str] = None
    role: Role = Role.FUNCIONARIO
    is_active: bool = True

class UserRead(UserBase):
    id: int

    class Config:
        from_attributes = True

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
