from datetime import date, time

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegistrationCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=40)
    company: str | None = Field(default=None, max_length=120)
    employeeId: str = Field(min_length=1)
    purpose: str = Field(min_length=1)
    visitDate: date
    visitTime: time


class RegistrationResponse(BaseModel):
    visitorId: str
    qrCode: str
    appointmentId: str
    status: str


class CheckInCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    visitorId: str = Field(min_length=1)
