from pydantic import BaseModel, Field, EmailStr

from linkup.schemas.user import UserOut

class RegisterIn(BaseModel):
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6)

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str

class LoginOut(UserOut):
    access_token: str
    refresh_token: str

class RefreshIn(BaseModel):
    token: str

class ForgotPasswordIn(BaseModel):
    email: EmailStr

class ResetPasswordIn(BaseModel):
    reset_token: str
    new_password: str = Field(min_length=6)

class ChangePasswordIn(BaseModel):
    old_password: str = Field(min_length=6)
    new_password: str = Field(min_length=6)
