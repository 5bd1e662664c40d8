import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func

from core.database import Base


class PokemonType(str, enum.Enum):
    NORMAL = "Normal"
    FIRE = "Fire"
    WATER = "Water"
    ELECTRIC = "Electric"
    GRASS = "Grass"
    ICE = "Ice"
    FIGHTING = "Fighting"
    POISON = "Poison"
    GROUND = "Ground"
    FLYING = "Flying"
    PSYCHIC = "Psychic"
    BUG = "Bug"
    ROCK = "Rock"
    GHOST = "Ghost"
    DRAGON = "Dragon"
    DARK = "Dark"
    STEEL = "Steel"
    FAIRY = "Fairy"


class Card(Base):
    __tablename__ = "cards"

    id = Column(Integer, primary_key=True)
    pokedex_number = Column(Integer, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    hp = Column(Integer, nullable=False)
    attack = Column(Integer, nullable=False)
    type = Column(
        Enum(PokemonType, name="pokemon_type", values_callable=lambda members: [m.value for m in members]),
        nullable=False,
    )
    img_url = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
