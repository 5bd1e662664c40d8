import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from core.errors import DuplicateCard, InvalidInputError, UnknownCard, WrongCardCount
from models.deck import Deck
from repositories.card_repo import CardRepository
from repositories.deck_repo import DeckRepository

logger = logging.getLogger(__name__)

DECK_SIZE = 10


@dataclass(frozen=True)
class DeckPatch:
    """Partial deck update. ``None`` means "leave unchanged"."""

    name: str | None = None
    card_ids: list[int] | None = None


class DeckService:
    def __init__(self, db: Session):
        self.deck_repo = DeckRepository(db)
        self.card_repo = CardRepository(db)

    def validate_card_ids(self, card_ids: list[int]) -> None:
        """Check a deck's card list before anything is written.

        Raises ``WrongCardCount`` unless there are exactly ``DECK_SIZE`` ids,
        ``DuplicateCard`` if an id repeats and ``UnknownCard`` (listing the
        offending ids) if any id is missing from the catalog.
        """
        if len(card_ids) != DECK_SIZE:
            raise WrongCardCount()
        if len(set(card_ids)) != len(card_ids):
            raise DuplicateCard()
        found = self.card_repo.existing_ids(card_ids)
        missing = [card_id for card_id in card_ids if card_id not in found]
        if missing:
            raise UnknownCard(missing)

    def create_deck(self, *, user_id: int, name: str, card_ids: list[int]) -> Deck:
        self.validate_card_ids(card_ids)
        deck = self.deck_repo.create(user_id=user_id, name=name, card_ids=card_ids)
        logger.info("User %s created deck %s", user_id, deck.id)
        return deck

    def list_decks(self, user_id: int) -> list[Deck]:
        return self.deck_repo.list_for_user(user_id)

    def get_deck(self, deck_id: int) -> Deck | None:
        return self.deck_repo.get(deck_id)

    def patch_deck(self, *, deck_id: int, patch: DeckPatch) -> Deck | None:
        deck = self.deck_repo.get(deck_id)
        if deck is None:
            return None

        name = None
        if patch.name is not None:
            name = patch.name.strip()
            if not name:
                raise InvalidInputError("Le nom du deck ne peut pas être vide")
        if patch.card_ids is not None:
            self.validate_card_ids(patch.card_ids)

        if name is None and patch.card_ids is None:
            return deck
        deck = self.deck_repo.update(deck, name=name, card_ids=patch.card_ids)
        logger.info("Deck %s updated", deck_id)
        return deck

    def delete_deck(self, *, deck_id: int) -> Deck | None:
        deck = self.deck_repo.get(deck_id)
        if deck is None:
            return None
        self.deck_repo.delete(deck)
        logger.info("Deck %s deleted", deck_id)
        return deck
