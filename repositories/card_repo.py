from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.database import is_storable_id
from models.card import Card


class CardRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Card]:
        stmt = select(Card).order_by(Card.pokedex_number.asc(), Card.id.asc())
        return list(self.db.execute(stmt).scalars())

    def existing_ids(self, card_ids: Iterable[int]) -> set[int]:
        # ids the store cannot hold cannot exist in the catalog either
        ids = {card_id for card_id in card_ids if is_storable_id(card_id)}
        if not ids:
            return set()
        stmt = select(Card.id).where(Card.id.in_(ids))
        return set(self.db.execute(stmt).scalars())

    def existing_pokedex_numbers(self) -> set[int]:
        return set(self.db.execute(select(Card.pokedex_number)).scalars())

    def add_many(self, cards: list[Card]) -> list[Card]:
        self.db.add_all(cards)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return cards
