from typing import Optional

from pydantic import EmailStr, Field, field_validator

from agentbook.schemas.common import RequestModel


class AgentRegistration(RequestModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    phone: Optional[str] = Field(None, max_length=32)
    agency: Optional[str] = Field(None, max_length=160)
    agency_phone: Optional[str] = Field(None, max_length=32)
    agency_email: Optional[EmailStr] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value):
        return value.lower()

    @field_validator("agency_email", mode="before")
    @classmethod
    def blank_agency_email(cls, value):
        return value or None


class AgentLogin(RequestModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AgentUpdate(RequestModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    phone: Optional[str] = Field(None, max_length=32)
    agency: Optional[str] = Field(None, max_length=160)
    agency_phone: Optional[str] = Field(None, max_length=32)
    agency_email: Optional[EmailStr] = None
