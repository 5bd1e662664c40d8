from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from core.database import Base
from models.card import Card
from models.user import User  # noqa: F401


class Deck(Base):
    __tablename__ = "decks"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    owner = relationship("User", back_populates="decks")
    deck_cards = relationship(
        "DeckCard",
        back_populates="deck",
        cascade="all, delete-orphan",
        order_by="DeckCard.id",
        lazy="selectin",
    )

    @property
    def cards(self) -> list[Card]:
        return [link.card for link in self.deck_cards]


class DeckCard(Base):
    __tablename__ = "deck_cards"
    __table_args__ = (
        UniqueConstraint("deck_id", "card_id", name="uq_deck_cards_deck_card"),
    )

    id = Column(Integer, primary_key=True)
    deck_id = Column(Integer, ForeignKey("decks.id", ondelete="CASCADE"), nullable=False, index=True)
    card_id = Column(Integer, ForeignKey("cards.id"), nullable=False, index=True)

    deck = relationship("Deck", back_populates="deck_cards")
    card = relationship(Card, lazy="joined")
