import logging
from typing import Any, Iterable

from sqlalchemy.orm import Session

from models.card import Card, PokemonType
from repositories.card_repo import CardRepository

logger = logging.getLogger(__name__)


class CardService:
    def __init__(self, db: Session):
        self.repo = CardRepository(db)

    def list_all_cards(self) -> list[Card]:
        return self.repo.list_all()

    def seed_catalog(self, entries: Iterable[dict[str, Any]]) -> int:
        """Insert catalog entries whose pokedex number is not stored yet.

        Entries use the public JSON keys (``pokedexNumber``, ``imgUrl``...).
        Returns the number of inserted cards.
        """
        known = self.repo.existing_pokedex_numbers()
        new_cards: list[Card] = []
        for entry in entries:
            number = int(entry["pokedexNumber"])
            if number in known:
                continue
            known.add(number)
            new_cards.append(
                Card(
                    pokedex_number=number,
                    name=entry["name"],
                    hp=int(entry["hp"]),
                    attack=int(entry["attack"]),
                    type=PokemonType(entry["type"]),
                    img_url=entry.get("imgUrl"),
                )
            )
        if new_cards:
            self.repo.add_many(new_cards)
        logger.info("Seeded %d cards", len(new_cards))
        return len(new_cards)
