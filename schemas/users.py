"""schemas/users.py - Pydantic models for signup, login, password reset and profile endpoints."""

import re
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from schemas.search import CabinClass


# lower, upper, digit and one symbol from a fixed set; nothing else allowed
_PASSWORD_CHARSET = r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]"
SIGNUP_PASSWORD_RE = re.compile(r"^" + _PASSWORD_CHARSET + r"{12,}$")
RESET_PASSWORD_RE = re.compile(r"^" + _PASSWORD_CHARSET + r"{8,}$")


def _check_password(value: str, pattern: re.Pattern, min_len: int) -> str:
    if len(value) < min_len:
        raise ValueError(f"Password must be at least {min_len} characters")
    if not pattern.match(value):
        raise ValueError(
            "Password must contain upper and lower case letters, a number and one of @$!%*?&"
        )
    return value


class LoyaltyProgram(BaseModel):
    airlineIataCode: str = Field(..., min_length=2, max_length=2)
    programName: str = Field(..., min_length=1)
    accountNumber: str = Field(..., min_length=1)


# =====================================================================
# SECTION: SIGNUP
# =====================================================================

class SignupStep1(BaseModel):
    email: EmailStr
    password: str
    passwordConfirmation: str

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return _check_password(v, SIGNUP_PASSWORD_RE, 12)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.passwordConfirmation:
            raise ValueError("Passwords don't match")
        return self


class ProfileFields(BaseModel):
    firstName: str = Field(..., min_length=1)
    middleName: Optional[str] = None
    lastName: str = Field(..., min_length=1)
    preferredName: Optional[str] = None
    dateOfBirth: date
    phoneNumber: str = Field(..., min_length=1)
    homeAirportIataCode: Optional[str] = None
    avoidedAirlineIataCodes: Optional[List[str]] = None
    defaultCabinClass: Optional[CabinClass] = None
    defaultAdultPassengers: Optional[int] = Field(None, ge=1, le=9)
    defaultChildPassengers: Optional[int] = Field(None, ge=0, le=9)
    defaultInfantPassengers: Optional[int] = Field(None, ge=0, le=9)
    loyaltyPrograms: Optional[List[LoyaltyProgram]] = None

    @field_validator("avoidedAirlineIataCodes")
    @classmethod
    def airline_codes_are_two_letters(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        for code in v:
            if len(code) != 2:
                raise ValueError(f"Invalid airline IATA code: {code}")
        return v


class SignupStep2(ProfileFields):
    pass


class ProfileUpdate(ProfileFields):
    preferredCurrency: Optional[str] = Field(None, min_length=3, max_length=3)


# =====================================================================
# SECTION: LOGIN AND PASSWORD RESET
# =====================================================================

class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordReset(BaseModel):
    token: str
    password: str
    passwordConfirmation: str

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return _check_password(v, RESET_PASSWORD_RE, 8)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.passwordConfirmation:
            raise ValueError("Passwords don't match")
        return self


class ResendVerificationRequest(BaseModel):
    email: EmailStr


# =====================================================================
# SECTION: OUTBOUND USER SHAPES
# =====================================================================

class PublicUser(BaseModel):
    """User row as returned by /api/auth/login: every column except password and token fields."""
    id: str
    email: str
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    preferred_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    phone_number: Optional[str] = None
    site_rewards_tokens: int = 0
    home_airport_iata_code: Optional[str] = None
    avoided_airline_iata_codes: Optional[List[str]] = None
    default_cabin_class: Optional[str] = None
    default_adult_passengers: Optional[int] = None
    default_child_passengers: Optional[int] = None
    default_infant_passengers: Optional[int] = None
    loyalty_programs: Optional[List[dict]] = None
    preferred_currency: Optional[str] = None
    email_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user) -> "PublicUser":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            middle_name=user.middle_name,
            last_name=user.last_name,
            preferred_name=user.preferred_name,
            date_of_birth=user.date_of_birth,
            phone_number=user.phone_number,
            site_rewards_tokens=int(user.site_rewards_tokens or 0),
            home_airport_iata_code=user.home_airport_iata_code,
            avoided_airline_iata_codes=user.avoided_airline_iata_codes,
            default_cabin_class=user.default_cabin_class,
            default_adult_passengers=user.default_adult_passengers,
            default_child_passengers=user.default_child_passengers,
            default_infant_passengers=user.default_infant_passengers,
            loyalty_programs=user.loyalty_programs,
            preferred_currency=user.preferred_currency,
            email_verified=bool(user.email_verified),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserProfile(BaseModel):
    id: str
    email: str
    firstName: Optional[str] = None
    middleName: Optional[str] = None
    lastName: Optional[str] = None
    preferredName: Optional[str] = None
    dateOfBirth: Optional[date] = None
    phoneNumber: Optional[str] = None
    siteRewardsTokens: int = 0
    homeAirportIataCode: Optional[str] = None
    avoidedAirlineIataCodes: Optional[List[str]] = None
    defaultCabinClass: Optional[str] = None
    defaultAdultPassengers: Optional[int] = None
    defaultChildPassengers: Optional[int] = None
    defaultInfantPassengers: Optional[int] = None
    loyaltyPrograms: Optional[List[dict]] = None
    preferredCurrency: str = "USD"
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    emailVerified: bool = False

    @classmethod
    def from_user(cls, user) -> "UserProfile":
        return cls(
            id=user.id,
            email=user.email,
            firstName=user.first_name,
            middleName=user.middle_name,
            lastName=user.last_name,
            preferredName=user.preferred_name,
            dateOfBirth=user.date_of_birth,
            phoneNumber=user.phone_number,
            siteRewardsTokens=int(user.site_rewards_tokens or 0),
            homeAirportIataCode=user.home_airport_iata_code,
            avoidedAirlineIataCodes=user.avoided_airline_iata_codes,
            defaultCabinClass=user.default_cabin_class,
            defaultAdultPassengers=user.default_adult_passengers,
            defaultChildPassengers=user.default_child_passengers,
            defaultInfantPassengers=user.default_infant_passengers,
            loyaltyPrograms=user.loyalty_programs,
            preferredCurrency=user.preferred_currency or "USD",
            createdAt=user.created_at,
            updatedAt=user.updated_at,
            emailVerified=bool(user.email_verified),
        )
