from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: str = ""
    password: str = ""


class LoginResponse(CamelModel):
    message: str
    token: str
