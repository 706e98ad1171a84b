import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import BadRequestError, InternalError, database_error_message
from ..models import FakeCard
from ..schemas import (
    CardCreate,
    CardResponse,
    CardValidate,
    CardValidationResponse,
    ErrorResponse,
    MessageResponse,
)

router = APIRouter(tags=["cards"], responses={500: {"model": ErrorResponse}})
logger = logging.getLogger(__name__)


@router.post("/add-card", response_model=MessageResponse)
def add_card(card: CardCreate, db: Session = Depends(get_db)):
    try:
        db_card = FakeCard(
            card_number=card.card_number,
            cardholder_name=card.cardholder_name,
            cvv=card.cvv,
            balance=card.balance,
        )
        db.add(db_card)
        db.commit()
        db.refresh(db_card)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to add card")
        raise InternalError(database_error_message(e)) from e

    logger.info("Fake card added: card_id=%s", db_card.id)
    return {"message": "Fake card added"}


@router.post(
    "/validate-card",
    response_model=CardValidationResponse,
    responses={400: {"model": ErrorResponse}},
)
def validate_card(payload: CardValidate, db: Session = Depends(get_db)):
    try:
        card = (
            db.query(FakeCard)
            .filter(FakeCard.card_number == payload.card_number, FakeCard.cvv == payload.cvv)
            .first()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Card lookup failed")
        raise InternalError(database_error_message(e)) from e

    if not card:
        logger.info("Card validation failed")
        raise BadRequestError("Invalid card")

    logger.info("Card validated: card_id=%s", card.id)
    return CardValidationResponse(message="Card validated", card=CardResponse.model_validate(card))
