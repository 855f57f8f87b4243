"""
Data Transfer Objects for identity endpoints.
Defines the login and registration forms and the public identity schema.
"""
from datetime import datetime
from pydantic import BaseModel, Field, ValidationInfo, field_validator


class LoginRequest(BaseModel):
    """Login form. Empty by default so it can be rendered blank."""
    username: str = Field(default="", min_length=1, description="Username")
    passphrase: str = Field(default="", min_length=1, description="Passphrase", exclude=True)


class RegistrationRequest(BaseModel):
    """Registration form. Empty by default so it can be rendered blank."""
    username: str = Field(
        default="",
        min_length=3,
        max_length=64,
        pattern=r"^[A-Za-z0-9._-]+$",
        description="Username (letters, digits, '.', '_' or '-')"
    )
    email: str = Field(
        default="",
        max_length=254,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="Email address"
    )
    passphrase: str = Field(default="", min_length=8, max_length=128, description="Passphrase", exclude=True)
    passphrase_confirmation: str = Field(default="", description="Passphrase, repeated", exclude=True)
    
    @field_validator('passphrase_confirmation')
    @classmethod
    def validate_confirmation(cls, v: str, info: ValidationInfo) -> str:
        passphrase = info.data.get('passphrase')
        if passphrase is not None and v != passphrase:
            raise ValueError("Passphrases do not match")
        return v


class IdentityResponse(BaseModel):
    """Public view of a registered identity."""
    identity_id: str
    username: str
    email: str
    created_at: datetime
    
    class Config:
        from_attributes = True


class FieldError(BaseModel):
    """A single validation failure on one form field."""
    field: str
    message: str
    
    class Config:
        frozen = True
