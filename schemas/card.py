from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.card import PokemonType


class CamelModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class CardOut(CamelModel):
    id: int
    pokedex_number: int
    name: str
    hp: int
    attack: int
    type: PokemonType
    img_url: str | None = None
    created_at: datetime
    updated_at: datetime
