from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserCredentials(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class RegistrationResponse(BaseModel):
    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    message: str
    token: str


class TokenClaims(BaseModel):
    id: int
    username: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


# Cards. Fields are passed through as given; missing values reach the store
# as NULL and numbers are kept as their string form.
class CardCreate(BaseModel):
    card_number: Optional[str] = None
    cardholder_name: Optional[str] = None
    cvv: Optional[str] = None
    balance: Optional[Decimal] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class CardValidate(BaseModel):
    card_number: Optional[str] = None
    cvv: Optional[str] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class CardResponse(BaseModel):
    id: int
    card_number: str
    cardholder_name: str
    cvv: str
    balance: Decimal

    model_config = ConfigDict(from_attributes=True)


class CardValidationResponse(BaseModel):
    message: str
    card: CardResponse
