from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginUser(BaseModel):
    username: str
    name: str
    role: str = "admin"


class LoginResponse(BaseModel):
    token: str
    user: LoginUser
