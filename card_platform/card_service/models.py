from sqlalchemy import Column, Integer, Numeric, String, Text

from .db import Base


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    # bcrypt hash, never the plain password
    password = Column(Text, nullable=False)


class FakeCard(Base):
    __tablename__ = "fake_cards"
    id = Column(Integer, primary_key=True, index=True)
    card_number = Column(String(16), unique=True, nullable=False)
    cardholder_name = Column(String(100), nullable=False)
    # Stored as plain text; these are test cards only
    cvv = Column(String(3), nullable=False)
    balance = Column(Numeric(10, 2), nullable=False)
