"""services/user_service.py - User lookups and profile writes shared by signup and /api/user/profile."""

from typing import Optional

from sqlalchemy.orm import Session

from models import User
from schemas.users import ProfileFields, ProfileUpdate


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == str(user_id)).first()


def apply_profile_fields(user: User, data: ProfileFields) -> None:
    user.first_name = data.firstName
    user.middle_name = data.middleName or None
    user.last_name = data.lastName
    user.preferred_name = data.preferredName or None
    user.date_of_birth = data.dateOfBirth
    user.phone_number = data.phoneNumber
    # 3-letter IATA code or a free-text city name, stored as given
    user.home_airport_iata_code = data.homeAirportIataCode
    user.avoided_airline_iata_codes = data.avoidedAirlineIataCodes or None
    user.default_cabin_class = data.defaultCabinClass.value if data.defaultCabinClass else None
    user.default_adult_passengers = data.defaultAdultPassengers
    user.default_child_passengers = data.defaultChildPassengers
    user.default_infant_passengers = data.defaultInfantPassengers
    user.loyalty_programs = (
        [p.model_dump() for p in data.loyaltyPrograms] if data.loyaltyPrograms is not None else None
    )
    if isinstance(data, ProfileUpdate):
        user.preferred_currency = data.preferredCurrency
