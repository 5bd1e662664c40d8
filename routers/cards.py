from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.card import CardOut
from services.card_service import CardService

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=list[CardOut])
async def list_cards(db: Session = Depends(get_db)):
    svc = CardService(db)
    cards = svc.list_all_cards()
    return [CardOut.model_validate(card, from_attributes=True) for card in cards]
