"""Tile maps made ready for lookup: tiles resolved to their tileset and layers keyed by name."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from quadkit import tiled_format
from quadkit.geometry import Rect

_U32_MAX = 2**32 - 1
_MISSING = object()


class TiledError(Exception):
    """Base class of the errors raised while loading a map."""


class JsonError(TiledError):
    """The map or a tileset document could not be read."""

    def __init__(self, msg: str, line: int, col: int) -> None:
        super().__init__(f"{msg} at line {line}, column {col}")
        self.msg = msg
        self.line = line
        self.col = col


class NonUniqueLayerName(TiledError):
    """Two layers share a name, so they cannot be told apart."""

    def __init__(self, layer: str) -> None:
        super().__init__(
            f"Layer name should be unique to load a tiled level, non-unique layer name: {layer}"
        )
        self.layer = layer


class TextureNotFound(TiledError):
    """A tileset refers to an image for which no texture was given."""

    def __init__(self, texture: str) -> None:
        super().__init__(f"texture not found: {texture}")
        self.texture = texture


@dataclass
class Object:
    """An object from an object layer, in world and in tile units."""

    gid: int | None
    world_x: float
    world_y: float
    world_w: float
    world_h: float
    tile_x: int
    tile_y: int
    tile_w: int
    tile_h: int
    name: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Tile:
    """A placed tile: its id within its tileset and the tile's type attribute."""

    id: int
    tileset: str
    attrs: str


@dataclass
class Layer:
    """A layer's objects and its tiles in row-major order."""

    objects: list[Object]
    width: int
    height: int
    data: list[Tile | None]


@dataclass
class TileSet:
    """Texture and grid geometry of a tileset."""

    texture: Any
    tilewidth: int
    tileheight: int
    columns: int
    spacing: int
    margin: int

    def sprite_rect(self, ix: int) -> Rect:
        """Texture area of sprite ``ix``, shrunk a little to avoid bleeding."""
        sw = float(self.tilewidth)
        sh = float(self.tileheight)
        sx = (ix % self.columns) * (sw + self.spacing) + self.margin
        sy = (ix // self.columns) * (sh + self.spacing) + self.margin
        return Rect(sx + 1.1, sy + 1.1, sw - 2.2, sh - 2.2)


def _f32_to_u32(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def _divide(value: float, by: float) -> float:
    if by == 0:
        return math.nan if value == 0 else math.copysign(math.inf, value)
    return value / by


def _iter_tiles(layer: Layer, rect: Rect) -> Iterator[tuple[int, int, Tile | None]]:
    x0, y0 = _f32_to_u32(rect.x), _f32_to_u32(rect.y)
    x_end = x0 + _f32_to_u32(rect.w)
    y_end = y0 + _f32_to_u32(rect.h)
    x, y = x0, y0
    while True:
        # the step is computed before yielding, so the last cell of the area is never reached
        if x + 1 >= x_end:
            next_x, next_y = x0, y + 1
        else:
            next_x, next_y = x + 1, y
        if next_y >= y_end:
            return
        yield x, y, layer.data[y * layer.width + x]
        x, y = next_x, next_y


@dataclass
class Map:
    """A loaded map: layers and tilesets by name, plus the document as read."""

    layers: dict[str, Layer]
    tilesets: dict[str, TileSet]
    raw_tiled_map: tiled_format.RawMap

    def _layer(self, layer: str) -> Layer:
        try:
            return self.layers[layer]
        except KeyError:
            raise KeyError(f"No such layer: {layer}") from None

    def contains_layer(self, layer: str) -> bool:
        """Whether a layer of that name exists."""
        return layer in self.layers

    def tiles(self, layer: str, rect: Rect | None = None) -> Iterator[tuple[int, int, Tile | None]]:
        """Iterate ``(x, y, tile)`` over an area of a layer in row-major order.

        The area defaults to the whole map.
        """
        found = self._layer(layer)
        if rect is None:
            rect = Rect(0.0, 0.0, float(self.raw_tiled_map.width), float(self.raw_tiled_map.height))
        return _iter_tiles(found, rect)

    def get_tile(self, layer: str, x: int, y: int) -> Tile | None:
        """The tile at ``(x, y)``, or None when empty or outside the layer."""
        found = self._layer(layer)
        if not (0 <= x < found.width and 0 <= y < found.height):
            return None
        return found.data[y * found.width + x]


def _pairs(items: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> list[tuple[str, Any]]:
    if isinstance(items, Mapping):
        return list(items.items())
    return list(items)


def _lookup(pairs: list[tuple[str, Any]], name: str) -> Any:
    return next((value for key, value in pairs if key == name), _MISSING)


def _resolve_tile(gid: int, tilesets: list[tiled_format.Tileset]) -> Tile | None:
    for tileset in tilesets:
        if tileset.firstgid <= gid < tileset.firstgid + tileset.tilecount:
            local_id = gid - tileset.firstgid
            info = next((t for t in tileset.tiles if t.id == local_id), None)
            attrs = info.type if info is not None and info.type is not None else ""
            return Tile(id=local_id, tileset=tileset.name, attrs=attrs)
    return None


def _convert_object(obj: tiled_format.MapObject, tile_width: float, tile_height: float) -> Object:
    return Object(
        gid=obj.gid,
        world_x=obj.x,
        world_y=obj.y,
        world_w=obj.width,
        world_h=obj.height,
        tile_x=_f32_to_u32(_divide(obj.x, tile_width)),
        tile_y=_f32_to_u32(_divide(obj.y, tile_height)),
        tile_w=_f32_to_u32(_divide(obj.width, tile_width)),
        tile_h=_f32_to_u32(_divide(obj.height, tile_height)),
        name=obj.name,
        properties={prop.name: prop.value for prop in obj.properties},
    )


def _parse(reader: Any, data: str) -> Any:
    try:
        return reader(data)
    except tiled_format.FormatError as exc:
        raise JsonError(exc.msg, exc.line, exc.col) from exc


def load_map(
    data: str,
    textures: Mapping[str, Any] | Iterable[tuple[str, Any]],
    external_tilesets: Mapping[str, str] | Iterable[tuple[str, str]] = (),
) -> Map:
    """Load a map from its JSON text.

    ``textures`` maps image names used in the map to textures.
    ``external_tilesets`` maps the ``source`` names of tilesets kept in
    separate files to their JSON text.
    """
    raw = _parse(tiled_format.parse_map, data)
    texture_pairs = _pairs(textures)
    external_pairs = _pairs(external_tilesets)

    tilesets: dict[str, TileSet] = {}
    resolved: list[tiled_format.Tileset] = []
    for tileset in raw.tilesets:
        if tileset.source:
            content = _lookup(external_pairs, tileset.source)
            if content is _MISSING:
                raise LookupError(f"external tileset not provided: {tileset.source}")
            loaded = _parse(tiled_format.parse_tileset, content)
            tileset = dataclasses.replace(loaded, firstgid=tileset.firstgid)

        texture = _lookup(texture_pairs, tileset.image)
        if texture is _MISSING:
            raise TextureNotFound(tileset.image)

        tilesets[tileset.name] = TileSet(
            texture=texture,
            tilewidth=tileset.tilewidth,
            tileheight=tileset.tileheight,
            columns=tileset.columns & _U32_MAX,
            spacing=tileset.spacing,
            margin=tileset.margin,
        )
        resolved.append(tileset)

    tile_width = float(raw.tilewidth)
    tile_height = float(raw.tileheight)
    layers: dict[str, Layer] = {}
    for raw_layer in raw.layers:
        if raw_layer.name in layers:
            raise NonUniqueLayerName(raw_layer.name)
        layers[raw_layer.name] = Layer(
            objects=[_convert_object(obj, tile_width, tile_height) for obj in raw_layer.objects],
            width=raw_layer.width,
            height=raw_layer.height,
            data=[_resolve_tile(gid, resolved) for gid in raw_layer.data],
        )

    return Map(layers=layers, tilesets=tilesets, raw_tiled_map=raw)