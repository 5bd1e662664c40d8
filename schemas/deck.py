from datetime import datetime

from pydantic import BaseModel, field_validator

from schemas.card import CamelModel, CardOut


class DeckCreateIn(BaseModel):
    name: str | None = None
    cards: list[int] | None = None

    @field_validator("cards", mode="before")
    @classmethod
    def _cards_must_be_list(cls, value):
        if value is not None and not isinstance(value, list):
            raise ValueError("Les cartes doivent être un tableau")
        return value


class DeckPatchIn(DeckCreateIn):
    pass


class DeckOut(CamelModel):
    id: int
    name: str
    user_id: int
    created_at: datetime
    updated_at: datetime
    cards: list[CardOut]


class DeckEnvelope(BaseModel):
    deck: DeckOut


class DeckMessageOut(BaseModel):
    message: str
    deck: DeckOut


class DeckListOut(BaseModel):
    decks: list[DeckOut]
