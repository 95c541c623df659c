from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshTokenRequest(BaseModel):
    refreshToken: str


class StaffUserCreate(BaseModel):
    fullName: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)
    role: str = "security"
    employeeId: str | None = None


class AdminSignupRequest(BaseModel):
    fullName: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)
    signupKey: str


class AuthUser(BaseModel):
    id: str
    fullName: str
    email: EmailStr
    role: str
    employeeId: str | None = None


class AuthResponse(BaseModel):
    accessToken: str
    refreshToken: str
    user: AuthUser
