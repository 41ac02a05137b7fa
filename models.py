# =======================================
# SECTION: IMPORTS AND BASE
# =======================================

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    Date,
    Float,
)

from db import Base


def _new_id() -> str:
    return str(uuid4())


# =======================================
# SECTION: USER MODEL
# =======================================

class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    first_name = Column(String(100), nullable=True)
    middle_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    preferred_name = Column(String(100), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    phone_number = Column(String(50), nullable=True)

    site_rewards_tokens = Column(Integer, nullable=False, default=0)

    # =======================================
    # SECTION: TRAVEL PREFERENCES
    # =======================================
    home_airport_iata_code = Column(String(100), nullable=True)  # IATA code or free-text city
    avoided_airline_iata_codes = Column(JSON, nullable=True)     # ["BA", "AA"]
    default_cabin_class = Column(String(20), nullable=True)      # economy | premium_economy | business | first
    default_adult_passengers = Column(Integer, nullable=True)
    default_child_passengers = Column(Integer, nullable=True)
    default_infant_passengers = Column(Integer, nullable=True)
    loyalty_programs = Column(JSON, nullable=True)               # [{airlineIataCode, programName, accountNumber}]
    preferred_currency = Column(String(3), nullable=True)

    # =======================================
    # SECTION: VERIFICATION AND RESET
    # =======================================
    email_verified = Column(Boolean, nullable=False, default=False)
    email_verification_token = Column(String(100), nullable=True, index=True)
    email_verification_token_expires_at = Column(DateTime, nullable=True)

    reset_password_token = Column(String(100), nullable=True, index=True)
    reset_password_expires = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


# =======================================
# SECTION: AIRPORTS (synced from Duffel)
# =======================================

class Airport(Base):
    __tablename__ = "airports"

    id = Column(Integer, primary_key=True, index=True)
    duffel_id = Column(String(50), nullable=True)
    iata_code = Column(String(3), unique=True, index=True, nullable=True)
    name = Column(String(255), nullable=False)
    city_name = Column(String(255), nullable=True)
    country_code = Column(String(2), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
