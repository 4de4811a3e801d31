"""
Tests for deriving POS fields from OSM tags.
"""
import logging

import pytest

from domain.models import OsmNode
from services.osm_fields import (
    decode_html_entities,
    normalize_osm_node,
    parse_postal_code,
    resolve_name,
)


class TestResolveName:
    def test_german_name_preferred(self):
        tags = {"name": "A", "name:de": "B", "name:en": "C"}
        assert resolve_name(tags) == "B"

    def test_english_name_without_german(self):
        tags = {"name": "A", "name:en": "C"}
        assert resolve_name(tags) == "C"

    def test_plain_name_as_last_resort(self):
        assert resolve_name({"name": "A"}) == "A"

    def test_empty_preferred_value_is_skipped(self):
        tags = {"name": "A", "name:de": "", "name:en": "C"}
        assert resolve_name(tags) == "C"

    def test_no_name_tags(self):
        assert resolve_name({"amenity": "cafe"}) is None

    def test_resolved_name_is_decoded(self):
        assert resolve_name({"name:de": "Rada Coffee &amp; Rösterei"}) == "Rada Coffee & Rösterei"


class TestDecodeHtmlEntities:
    def test_known_entities(self):
        assert decode_html_entities("&lt;b&gt; &quot;x&quot; &apos;y&apos; &amp;") == "<b> \"x\" 'y' &"

    def test_unknown_entities_pass_through(self):
        assert decode_html_entities("Caf&eacute; &#38; &nbsp;") == "Caf&eacute; &#38; &nbsp;"

    def test_ampersand_is_decoded_first(self):
        assert decode_html_entities("&amp;lt;b&amp;gt;") == "<b>"

    def test_none(self):
        assert decode_html_entities(None) is None


class TestParsePostalCode:
    def test_integer(self):
        assert parse_postal_code("69117") == 69117

    def test_leading_plus_sign(self):
        assert parse_postal_code("+69120") == 69120

    @pytest.mark.parametrize("value", ["69_117", " 69117", "69117 ", "６９１１７", "69117.0"])
    def test_non_plain_integers_are_absent(self, value):
        assert parse_postal_code(value) is None

    def test_absent(self):
        assert parse_postal_code(None) is None
        assert parse_postal_code("") is None

    def test_unparseable_is_absent_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="services.osm_fields"):
            assert parse_postal_code("D-69117") is None
        assert "D-69117" in caplog.text


def test_normalize_osm_node_maps_all_fields():
    node = OsmNode(
        node_id=5589879349,
        latitude=49.4122362,
        longitude=8.7077883,
        tags={
            "name:de": "Rada Coffee &amp; Rösterei",
            "description": "Specialty coffee &quot;roasted in house&quot;",
            "amenity": "cafe",
            "addr:street": "Untere Straße",
            "addr:housenumber": "21",
            "addr:postcode": "69117",
            "addr:city": "Heidelberg",
        },
    )
    fields = normalize_osm_node(node)

    assert fields.node_id == 5589879349
    assert fields.name == "Rada Coffee & Rösterei"
    assert fields.description == 'Specialty coffee "roasted in house"'
    assert fields.amenity == "cafe"
    assert fields.street == "Untere Straße"
    assert fields.house_number == "21"
    assert fields.postal_code == 69117
    assert fields.city == "Heidelberg"


def test_normalize_osm_node_represents_absence_as_none():
    fields = normalize_osm_node(OsmNode(node_id=1, tags={"addr:city": ""}))

    assert fields.name is None
    assert fields.description is None
    assert fields.amenity is None
    assert fields.street is None
    assert fields.house_number is None
    assert fields.postal_code is None
    assert fields.city is None
