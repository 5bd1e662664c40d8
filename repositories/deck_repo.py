from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.database import is_storable_id
from models.deck import Deck, DeckCard


class DeckRepository:
    """Persistence for decks and their card links.

    Every write that touches the card set of a deck is flushed and committed
    as one transaction; on failure the session is rolled back so no deck is
    ever left with a partial set of links.
    """

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def create(self, *, user_id: int, name: str, card_ids: list[int]) -> Deck:
        deck = Deck(
            user_id=user_id,
            name=name,
            deck_cards=[DeckCard(card_id=card_id) for card_id in card_ids],
        )
        self.db.add(deck)
        self._commit()
        self.db.refresh(deck)
        return deck

    def list_for_user(self, user_id: int) -> list[Deck]:
        stmt = select(Deck).where(Deck.user_id == user_id).order_by(Deck.id.asc())
        return list(self.db.execute(stmt).scalars())

    def get(self, deck_id: int) -> Deck | None:
        if not is_storable_id(deck_id):
            return None
        return self.db.get(Deck, deck_id)

    def update(self, deck: Deck, *, name: str | None = None, card_ids: list[int] | None = None) -> Deck:
        try:
            if name is not None:
                deck.name = name
            if card_ids is not None:
                # old links must be gone before the new ones hit the unique (deck_id, card_id) index
                deck.deck_cards.clear()
                self.db.flush()
                deck.deck_cards.extend(DeckCard(card_id=card_id) for card_id in card_ids)
                deck.updated_at = func.now()
            self.db.flush()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self._commit()
        self.db.refresh(deck)
        return deck

    def delete(self, deck: Deck) -> Deck:
        self.db.delete(deck)
        self._commit()
        return deck
