from pydantic import BaseModel, ConfigDict


class RegisterIn(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


class AuthOut(BaseModel):
    message: str
    token: str
    user: UserOut
