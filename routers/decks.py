from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import ForbiddenError, MissingFields, NotFoundError
from models.deck import Deck
from schemas.deck import DeckCreateIn, DeckEnvelope, DeckListOut, DeckMessageOut, DeckOut, DeckPatchIn
from services.deck_service import DeckPatch, DeckService
from .auth import current_user_id

router = APIRouter(prefix="/decks", tags=["decks"])

NO_DECKS_MESSAGE = "Aucun deck trouvé pour cet utilisateur"


def _owned_deck(svc: DeckService, *, deck_id: int, user_id: int) -> Deck:
    deck = svc.get_deck(deck_id)
    if deck is None:
        raise NotFoundError()
    if deck.user_id != user_id:
        raise ForbiddenError()
    return deck


@router.post("", response_model=DeckMessageOut, status_code=status.HTTP_201_CREATED)
async def create_deck(
    data: DeckCreateIn,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    name = (data.name or "").strip()
    if not name or data.cards is None:
        raise MissingFields("Le nom et les cartes sont requis")
    svc = DeckService(db)
    deck = svc.create_deck(user_id=user_id, name=name, card_ids=data.cards)
    return DeckMessageOut(message="Deck créé avec succès", deck=DeckOut.model_validate(deck, from_attributes=True))


@router.get("/mine")
async def list_my_decks(
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    svc = DeckService(db)
    decks = svc.list_decks(user_id)
    if not decks:
        return {"message": NO_DECKS_MESSAGE}
    return DeckListOut(decks=[DeckOut.model_validate(deck, from_attributes=True) for deck in decks])


@router.get("/{deck_id}", response_model=DeckEnvelope)
async def get_deck(
    deck_id: int,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    svc = DeckService(db)
    deck = _owned_deck(svc, deck_id=deck_id, user_id=user_id)
    return DeckEnvelope(deck=DeckOut.model_validate(deck, from_attributes=True))


@router.patch("/{deck_id}", response_model=DeckMessageOut)
async def patch_deck(
    deck_id: int,
    data: DeckPatchIn,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    svc = DeckService(db)
    _owned_deck(svc, deck_id=deck_id, user_id=user_id)
    deck = svc.patch_deck(deck_id=deck_id, patch=DeckPatch(name=data.name, card_ids=data.cards))
    if deck is None:
        raise NotFoundError()
    return DeckMessageOut(message="Deck mis à jour avec succès", deck=DeckOut.model_validate(deck, from_attributes=True))


@router.delete("/{deck_id}")
async def delete_deck(
    deck_id: int,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    svc = DeckService(db)
    _owned_deck(svc, deck_id=deck_id, user_id=user_id)
    if svc.delete_deck(deck_id=deck_id) is None:
        raise NotFoundError()
    return {"message": "Deck supprimé avec succès"}
