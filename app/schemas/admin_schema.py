from pydantic import BaseModel, ConfigDict, EmailStr


class AdminIdentity(BaseModel):
    admin_id: int
    email: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class AdminLogin(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    admin: AdminIdentity
