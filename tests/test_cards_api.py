import json
from pathlib import Path

import pytest

from models.card import Card, PokemonType
from services.card_service import CardService

SEED_FILE = Path(__file__).parents[1] / "data" / "cards.json"


def test_list_cards_is_public_and_sorted_by_pokedex_number(client, catalog):
    response = client.get("/cards")

    assert response.status_code == 200
    numbers = [card["pokedexNumber"] for card in response.json()]
    assert numbers == sorted(numbers)
    assert len(numbers) == len(catalog)


def test_card_payload_uses_public_field_names(client, catalog):
    first = client.get("/cards").json()[0]

    assert set(first) == {
        "id", "pokedexNumber", "name", "hp", "attack", "type", "imgUrl", "createdAt", "updatedAt",
    }
    assert first["pokedexNumber"] == 1
    assert first["type"] in {t.value for t in PokemonType}


def test_list_cards_empty_catalog(client):
    response = client.get("/cards")

    assert response.status_code == 200
    assert response.json() == []


class TestSeedCatalog:
    def test_seed_inserts_entries(self, db_session):
        entries = [
            {"pokedexNumber": 25, "name": "Pikachu", "hp": 35, "attack": 55, "type": "Electric", "imgUrl": "pikachu.png"},
            {"pokedexNumber": 4, "name": "Charmander", "hp": 39, "attack": 52, "type": "Fire"},
        ]

        inserted = CardService(db_session).seed_catalog(entries)

        assert inserted == 2
        cards = CardService(db_session).list_all_cards()
        assert [card.name for card in cards] == ["Charmander", "Pikachu"]
        assert cards[0].type is PokemonType.FIRE
        assert cards[0].img_url is None

    def test_seed_skips_known_pokedex_numbers(self, db_session):
        db_session.add(Card(pokedex_number=25, name="Pikachu", hp=35, attack=55, type=PokemonType.ELECTRIC))
        db_session.commit()
        entries = [
            {"pokedexNumber": 25, "name": "Pikachu", "hp": 35, "attack": 55, "type": "Electric"},
            {"pokedexNumber": 26, "name": "Raichu", "hp": 60, "attack": 90, "type": "Electric"},
            {"pokedexNumber": 26, "name": "Raichu", "hp": 60, "attack": 90, "type": "Electric"},
        ]

        assert CardService(db_session).seed_catalog(entries) == 1
        assert CardService(db_session).seed_catalog(entries) == 0

    def test_bundled_seed_file_loads(self, db_session):
        entries = json.loads(SEED_FILE.read_text(encoding="utf-8"))

        inserted = CardService(db_session).seed_catalog(entries)

        assert inserted == len(entries)
        assert inserted >= 10


def test_seed_script_rejects_non_list_file(tmp_path):
    from seed_cards import load_entries

    bad = tmp_path / "cards.json"
    bad.write_text('{"name": "Pikachu"}', encoding="utf-8")

    with pytest.raises(ValueError):
        load_entries(bad)
    assert load_entries(SEED_FILE)[0]["name"] == "Bulbasaur"
