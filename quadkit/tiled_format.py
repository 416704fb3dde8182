"""Data model and strict JSON reader for maps and tilesets saved by the Tiled editor.

Fields missing from the JSON take their defaults, except in the few records
whose fields are all required. Values of the wrong type are rejected, and
unknown keys are ignored.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

_I32 = (-(2**31), 2**31 - 1)
_U32 = (0, 2**32 - 1)
_USIZE = (0, 2**64 - 1)

_MISSING = object()

_Converter = Callable[[Any, str], Any]


class FormatError(ValueError):
    """The document is not valid JSON or does not match the expected layout."""

    def __init__(self, msg: str, line: int = 0, col: int = 0) -> None:
        super().__init__(f"{msg} (line {line}, column {col})")
        self.msg = msg
        self.line = line
        self.col = col


def _integer(bounds: tuple[int, int]) -> _Converter:
    low, high = bounds

    def convert(value: Any, name: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise FormatError(f"field {name!r}: expected an integer, got {value!r}")
        if not low <= value <= high:
            raise FormatError(f"field {name!r}: {value} is out of range")
        return value

    return convert


_i32 = _integer(_I32)
_u32 = _integer(_U32)
_usize = _integer(_USIZE)


def _float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatError(f"field {name!r}: expected a number, got {value!r}")
    return float(value)


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise FormatError(f"field {name!r}: expected a string, got {value!r}")
    return value


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise FormatError(f"field {name!r}: expected a boolean, got {value!r}")
    return value


def _object(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise FormatError(f"field {name!r}: expected an object, got {value!r}")
    return value


def _list(item: _Converter) -> _Converter:
    def convert(value: Any, name: str) -> list[Any]:
        if not isinstance(value, list):
            raise FormatError(f"field {name!r}: expected an array, got {value!r}")
        return [item(element, f"{name}[{i}]") for i, element in enumerate(value)]

    return convert


def _optional(inner: _Converter) -> _Converter:
    def convert(value: Any, name: str) -> Any:
        return None if value is None else inner(value, name)

    return convert


def _record(reader: Callable[[dict[str, Any]], Any]) -> _Converter:
    def convert(value: Any, name: str) -> Any:
        return reader(_object(value, name))

    return convert


def _str_map(value: Any, name: str) -> dict[str, str]:
    return {key: _str(item, f"{name}.{key}") for key, item in _object(value, name).items()}


def _get(obj: dict[str, Any], key: str, convert: _Converter, default: Any = _MISSING) -> Any:
    if key not in obj:
        if default is _MISSING:
            raise FormatError(f"missing field {key!r}")
        return default() if callable(default) else default
    return convert(obj[key], key)


@dataclass
class Grid:
    """Grid settings of a tileset; both fields are required."""

    width: int = 0
    height: int = 0

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> Grid:
        return cls(width=_get(obj, "width", _i32), height=_get(obj, "height", _i32))


@dataclass
class Property:
    """A custom property: name, value and Tiled type name."""

    name: str = ""
    value: str = ""
    type: str = ""

    @classmethod
    def _from_json(cls, obj: dict[str, Any], strict: bool) -> Property:
        default = _MISSING if strict else ""
        return cls(
            name=_get(obj, "name", _str, default),
            value=_get(obj, "value", _str, default),
            type=_get(obj, "type", _str, default),
        )


def _strict_property(obj: dict[str, Any]) -> Property:
    return Property._from_json(obj, strict=True)


def _lenient_property(obj: dict[str, Any]) -> Property:
    return Property._from_json(obj, strict=False)


@dataclass
class Frame:
    """One frame of a tile animation; both fields are required."""

    duration: int = 0
    tileid: int = 0

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> Frame:
        return cls(duration=_get(obj, "duration", _i32), tileid=_get(obj, "tileid", _i32))


@dataclass
class TileInfo:
    """Per-tile data stored in a tileset."""

    animation: list[Frame] = field(default_factory=list)
    id: int = 0
    image: str | None = None
    imagewidth: int = 0
    imageheight: int = 0
    objectgroup: dict[str, Any] | None = None
    properties: list[Property] = field(default_factory=list)
    terrain: list[int] = field(default_factory=list)
    type: str | None = None

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> TileInfo:
        return cls(
            animation=_get(obj, "animation", _list(_record(Frame._from_json)), list),
            id=_get(obj, "id", _usize, 0),
            image=_get(obj, "image", _optional(_str), None),
            imagewidth=_get(obj, "imagewidth", _i32, 0),
            imageheight=_get(obj, "imageheight", _i32, 0),
            objectgroup=_get(obj, "objectgroup", _optional(_object), None),
            properties=_get(obj, "properties", _list(_record(_strict_property)), list),
            terrain=_get(obj, "terrain", _list(_i32), list),
            type=_get(obj, "type", _optional(_str), None),
        )


@dataclass
class Tileoffset:
    """Drawing offset of the tiles in a tileset; both fields are required."""

    x: int = 0
    y: int = 0

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> Tileoffset:
        return cls(x=_get(obj, "x", _i32), y=_get(obj, "y", _i32))


@dataclass
class Terrain:
    """A terrain type; both fields are required."""

    name: str = ""
    tile: int = 0

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> Terrain:
        return cls(name=_get(obj, "name", _str), tile=_get(obj, "tile", _i32))


@dataclass
class Tileset:
    """A tileset, embedded in a map or loaded from its own file."""

    columns: int = 0
    firstgid: int = 0
    grid: Grid | None = None
    image: str = ""
    imagewidth: int = 0
    imageheight: int = 0
    margin: int = 0
    name: str = ""
    properties: list[Property] = field(default_factory=list)
    spacing: int = 0
    terrains: list[Terrain] | None = None
    tilecount: int = 0
    tileheight: int = 0
    tileoffset: Tileoffset | None = None
    tiles: list[TileInfo] = field(default_factory=list)
    tilewidth: int = 0
    transparentcolor: str | None = None
    source: str = ""

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> Tileset:
        return cls(
            columns=_get(obj, "columns", _i32, 0),
            firstgid=_get(obj, "firstgid", _u32, 0),
            grid=_get(obj, "grid", _optional(_record(Grid._from_json)), None),
            image=_get(obj, "image", _str, ""),
            imagewidth=_get(obj, "imagewidth", _i32, 0),
            imageheight=_get(obj, "imageheight", _i32, 0),
            margin=_get(obj, "margin", _i32, 0),
            name=_get(obj, "name", _str, ""),
            properties=_get(obj, "properties", _list(_record(_strict_property)), list),
            spacing=_get(obj, "spacing", _i32, 0),
            terrains=_get(
                obj, "terrains", _optional(_list(_record(Terrain._from_json))), None
            ),
            tilecount=_get(obj, "tilecount", _u32, 0),
            tileheight=_get(obj, "tileheight", _i32, 0),
            tileoffset=_get(
                obj, "tileoffset", _optional(_record(Tileoffset._from_json)), None
            ),
            tiles=_get(obj, "tiles", _list(_record(TileInfo._from_json)), list),
            tilewidth=_get(obj, "tilewidth", _i32, 0),
            transparentcolor=_get(obj, "transparentcolor", _optional(_str), None),
            source=_get(obj, "source", _str, ""),
        )


@dataclass
class Chunk:
    """A rectangular piece of an infinite tile layer."""

    data: list[int] = field(default_factory=list)
    height: int = 0
    width: int = 0
    x: int = 0
    y: int = 0

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> Chunk:
        return cls(
            data=_get(obj, "data", _list(_u32), list),
            height=_get(obj, "height", _usize, 0),
            width=_get(obj, "width", _usize, 0),
            x=_get(obj, "x", _i32, 0),
            y=_get(obj, "y", _i32, 0),
        )


@dataclass
class PolyPoint:
    """A polygon vertex; both coordinates are required."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> PolyPoint:
        return cls(x=_get(obj, "x", _float), y=_get(obj, "y", _float))


@dataclass
class MapObject:
    """An object placed on an object layer."""

    id: int = 0
    name: str = ""
    type: str = ""
    gid: int | None = None
    ellipse: bool | None = None
    polygon: list[PolyPoint] | None = None
    properties: list[Property] = field(default_factory=list)
    rotation: float = 0.0
    visible: bool = False
    height: float = 0.0
    width: float = 0.0
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> MapObject:
        return cls(
            id=_get(obj, "id", _u32, 0),
            name=_get(obj, "name", _str, ""),
            type=_get(obj, "type", _str, ""),
            gid=_get(obj, "gid", _optional(_u32), None),
            ellipse=_get(obj, "ellipse", _optional(_bool), None),
            polygon=_get(
                obj, "polygon", _optional(_list(_record(PolyPoint._from_json))), None
            ),
            properties=_get(obj, "properties", _list(_record(_lenient_property)), list),
            rotation=_get(obj, "rotation", _float, 0.0),
            visible=_get(obj, "visible", _bool, False),
            height=_get(obj, "height", _float, 0.0),
            width=_get(obj, "width", _float, 0.0),
            x=_get(obj, "x", _float, 0.0),
            y=_get(obj, "y", _float, 0.0),
        )


@dataclass
class Layer:
    """A tile layer or object layer of a map."""

    chunks: list[Chunk] | None = None
    name: str = ""
    opacity: float = 0.0
    properties: dict[str, str] | None = None
    visible: bool = False
    width: int = 0
    height: int = 0
    type: str = ""
    data: list[int] = field(default_factory=list)
    draworder: str | None = None
    objects: list[MapObject] = field(default_factory=list)
    offsetx: int | None = None
    offsety: int | None = None
    x: float | None = None
    y: float | None = None

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> Layer:
        return cls(
            chunks=_get(obj, "chunks", _optional(_list(_record(Chunk._from_json))), None),
            name=_get(obj, "name", _str, ""),
            opacity=_get(obj, "opacity", _float, 0.0),
            properties=_get(obj, "properties", _optional(_str_map), None),
            visible=_get(obj, "visible", _bool, False),
            width=_get(obj, "width", _u32, 0),
            height=_get(obj, "height", _u32, 0),
            type=_get(obj, "type", _str, ""),
            data=_get(obj, "data", _list(_u32), list),
            draworder=_get(obj, "draworder", _optional(_str), None),
            objects=_get(obj, "objects", _list(_record(MapObject._from_json)), list),
            offsetx=_get(obj, "offsetx", _optional(_i32), None),
            offsety=_get(obj, "offsety", _optional(_i32), None),
            x=_get(obj, "x", _optional(_float), None),
            y=_get(obj, "y", _optional(_float), None),
        )


@dataclass
class RawMap:
    """A whole map document as stored by the editor."""

    backgroundcolor: str = ""
    height: int = 0
    properties: list[Property] = field(default_factory=list)
    orientation: str = ""
    renderorder: str = ""
    tileheight: int = 0
    tilewidth: int = 0
    layers: list[Layer] = field(default_factory=list)
    tilesets: list[Tileset] = field(default_factory=list)
    version: str = ""
    width: int = 0
    type: str = ""

    @classmethod
    def _from_json(cls, obj: dict[str, Any]) -> RawMap:
        return cls(
            backgroundcolor=_get(obj, "backgroundcolor", _str, ""),
            height=_get(obj, "height", _u32, 0),
            properties=_get(obj, "properties", _list(_record(_strict_property)), list),
            orientation=_get(obj, "orientation", _str, ""),
            renderorder=_get(obj, "renderorder", _str, ""),
            tileheight=_get(obj, "tileheight", _u32, 0),
            tilewidth=_get(obj, "tilewidth", _u32, 0),
            layers=_get(obj, "layers", _list(_record(Layer._from_json)), list),
            tilesets=_get(obj, "tilesets", _list(_record(Tileset._from_json)), list),
            version=_get(obj, "version", _str, ""),
            width=_get(obj, "width", _u32, 0),
            type=_get(obj, "type", _str, ""),
        )


def _load_object(data: str) -> dict[str, Any]:
    try:
        document = json.loads(data)
    except json.JSONDecodeError as exc:
        raise FormatError(exc.msg, exc.lineno, exc.colno) from exc
    if not isinstance(document, dict):
        raise FormatError("expected a JSON object at the top level")
    return document


def parse_map(data: str) -> RawMap:
    """Read a map document from its JSON text."""
    return RawMap._from_json(_load_object(data))


def parse_tileset(data: str) -> Tileset:
    """Read a stand-alone tileset document from its JSON text."""
    return Tileset._from_json(_load_object(data))