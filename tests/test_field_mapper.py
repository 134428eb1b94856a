from enum import Enum

from datamagic.services.field_mapper import map_field_names

DICTIONARY = {
    "school.name": "name",
    "school.degrees_awarded.predominant": "level",
    "lat": "location.lat",
    "lon": "location.lon",
}


class Column(Enum):
    NAME = "school.name"


def test_renames_mapped_fields():
    row = {"school.name": "Yale", "school.degrees_awarded.predominant": "3"}
    assert map_field_names(row, DICTIONARY) == {"name": "Yale", "level": "3"}


def test_unmapped_fields_are_dropped():
    row = {"school.name": "Yale", "school.ownership": "private"}
    assert map_field_names(row, DICTIONARY) == {"name": "Yale"}


def test_location_fields_become_floats():
    mapped = map_field_names({"lat": "41.31", "lon": -72}, DICTIONARY)

    assert mapped == {"location.lat": 41.31, "location.lon": -72.0}
    assert all(isinstance(value, float) for value in mapped.values())


def test_enum_keys_are_looked_up_by_value():
    assert map_field_names({Column.NAME: "Yale"}, DICTIONARY) == {"name": "Yale"}


def test_empty_row():
    assert map_field_names({}, DICTIONARY) == {}


def test_blank_location_values_are_dropped():
    row = {"school.name": "Yale", "lat": "", "lon": None}
    assert map_field_names(row, DICTIONARY) == {"name": "Yale"}
