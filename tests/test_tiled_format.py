import json

import pytest

from quadkit.tiled_format import (
    FormatError,
    Frame,
    Layer,
    MapObject,
    PolyPoint,
    Property,
    RawMap,
    TileInfo,
    Tileset,
    parse_map,
    parse_tileset,
)


def test_empty_document_gives_defaults():
    assert parse_map("{}") == RawMap()


def test_unknown_keys_are_ignored():
    raw = parse_map(json.dumps({"width": 3, "editorsettings": {"chunksize": [1, 2]}}))
    assert raw.width == 3
    assert raw.layers == []


def test_invalid_json_reports_position():
    with pytest.raises(FormatError) as info:
        parse_map('{\n  "width": }')
    assert info.value.line == 2


def test_top_level_must_be_object():
    with pytest.raises(FormatError):
        parse_map("[1, 2]")


def test_wrong_type_is_rejected():
    with pytest.raises(FormatError):
        parse_map(json.dumps({"width": "wide"}))


def test_negative_unsigned_is_rejected():
    with pytest.raises(FormatError):
        parse_map(json.dumps({"height": -1}))


def test_boolean_is_not_an_integer():
    with pytest.raises(FormatError):
        parse_map(json.dumps({"tilewidth": True}))


def test_null_optional_field_reads_as_none():
    tileset = parse_tileset(json.dumps({"name": "t", "grid": None, "tileoffset": None}))
    assert tileset.grid is None
    assert tileset.tileoffset is None
    assert tileset.name == "t"


def test_tileset_property_requires_all_fields():
    with pytest.raises(FormatError):
        parse_tileset(json.dumps({"properties": [{"name": "a", "value": "b"}]}))


def test_tileset_property_read_in_full():
    tileset = parse_tileset(
        json.dumps({"properties": [{"name": "a", "value": "b", "type": "string"}]})
    )
    assert tileset.properties == [Property(name="a", value="b", type="string")]


def test_object_property_fields_default():
    raw = parse_map(
        json.dumps({"layers": [{"name": "o", "objects": [{"properties": [{"name": "a"}]}]}]})
    )
    assert raw.layers[0].objects[0].properties == [Property(name="a")]


def test_layer_with_objects_and_polygon():
    document = {
        "layers": [
            {
                "name": "things",
                "type": "objectgroup",
                "visible": True,
                "objects": [
                    {
                        "id": 7,
                        "name": "zone",
                        "type": "area",
                        "x": 1.5,
                        "y": 2,
                        "polygon": [{"x": 0, "y": 0}, {"x": 4, "y": 0.5}],
                    }
                ],
            }
        ]
    }
    layer = parse_map(json.dumps(document)).layers[0]
    assert layer.name == "things"
    assert layer.visible is True
    assert layer.objects[0] == MapObject(
        id=7,
        name="zone",
        type="area",
        x=1.5,
        y=2.0,
        polygon=[PolyPoint(0.0, 0.0), PolyPoint(4.0, 0.5)],
    )


def test_polygon_point_requires_both_coordinates():
    document = {"layers": [{"objects": [{"polygon": [{"x": 1}]}]}]}
    with pytest.raises(FormatError):
        parse_map(json.dumps(document))


def test_tile_layer_data_and_properties_map():
    document = {
        "layers": [
            {"name": "g", "width": 2, "height": 1, "data": [1, 0], "properties": {"k": "v"}}
        ]
    }
    layer = parse_map(json.dumps(document)).layers[0]
    assert layer == Layer(name="g", width=2, height=1, data=[1, 0], properties={"k": "v"})


def test_layer_properties_values_must_be_strings():
    document = {"layers": [{"properties": {"k": 1}}]}
    with pytest.raises(FormatError):
        parse_map(json.dumps(document))


def test_animation_frame_requires_tileid():
    document = {"tiles": [{"id": 1, "animation": [{"duration": 100}]}]}
    with pytest.raises(FormatError):
        parse_tileset(json.dumps(document))


def test_tile_type_and_animation():
    document = {
        "tiles": [{"id": 3, "type": "wall", "animation": [{"duration": 100, "tileid": 4}]}]
    }
    tileset = parse_tileset(json.dumps(document))
    assert tileset.tiles == [
        TileInfo(id=3, type="wall", animation=[Frame(duration=100, tileid=4)])
    ]


def test_parse_tileset_fields():
    document = {
        "name": "ground",
        "image": "ground.png",
        "columns": 8,
        "tilecount": 64,
        "tilewidth": 16,
        "tileheight": 16,
        "spacing": 1,
        "margin": 2,
    }
    assert parse_tileset(json.dumps(document)) == Tileset(
        name="ground",
        image="ground.png",
        columns=8,
        tilecount=64,
        tilewidth=16,
        tileheight=16,
        spacing=1,
        margin=2,
    )