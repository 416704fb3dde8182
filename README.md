# quadkit

Building blocks for immediate-mode game UIs and tile-based levels:

- `quadkit.geometry`: `Vec2`, `Rect`, `RectOffset` and `Color`.
- `quadkit.cursor`: the layout `Cursor` that decides where the next widget goes, with its `Scroll` state. `Cursor.fit` takes `Layout.VERTICAL`, `Layout.HORIZONTAL`, or a `Vec2` for a free position.
- `quadkit.input`: per-frame `Input` state, `KeyCode`, `InputCharacter`, a `Clipboard` interface with an in-memory `MemoryClipboard`, and `KeyRepeat` for emulating key repeat.
- `quadkit.text_editor`: `EditboxState`, which holds the cursor and selection, selects words and lines on repeated clicks, and keeps undo/redo history.
- `quadkit.editbox`: `apply_keyboard_input`, which feeds a frame's buffered key events into an `EditboxState`.
- `quadkit.tiled_format`: a strict reader for Tiled JSON maps (`parse_map`) and tilesets (`parse_tileset`).
- `quadkit.tilemap`: `load_map`, which builds a `Map` with layers keyed by name, tiles resolved to their tileset, and `TileSet` sprite geometry.

## Installation

```
pip install .
```

## Placing widgets

```python
from quadkit.cursor import Cursor, Layout
from quadkit.geometry import Rect, Vec2

cursor = Cursor(Rect(0, 0, 200, 100), margin=2.0)
print(cursor.fit(Vec2(50, 20), Layout.VERTICAL))  # Vec2(x=2.0, y=2.0)
print(cursor.fit(Vec2(50, 20), Layout.VERTICAL))  # Vec2(x=2.0, y=24.0)
```

## Editing text

Text is an ordinary `str`. Each editing operation returns the new text.

```python
from quadkit.text_editor import EditboxState

text = "hello"
state = EditboxState()
state.move_cursor(text, 5, False)
text = state.insert_string(text, " world")
text = state.undo(text)
assert text == "hello"
```

Keyboard events are applied in one call. The buffer is emptied as it is consumed:

```python
from quadkit.editbox import apply_keyboard_input
from quadkit.input import InputCharacter, KeyCode, MemoryClipboard
from quadkit.text_editor import EditboxState

state = EditboxState()
buffer = [InputCharacter("h"), InputCharacter("i"), InputCharacter(KeyCode.BACKSPACE)]
text = apply_keyboard_input(buffer, MemoryClipboard(), "", state)
assert text == "h" and buffer == []
```

Ctrl+Z, Ctrl+Y, Ctrl+X, Ctrl+V and Ctrl+A undo, redo, cut the selection, paste from the clipboard and select all. `multiline=False` ignores Enter. `char_filter` limits which typed or pasted characters are accepted.

## Loading a Tiled map

```python
from quadkit.tilemap import load_map

with open("level.json") as fh:
    level = load_map(fh.read(), {"tiles.png": "tiles-texture"})

if level.contains_layer("ground"):
    for x, y, tile in level.tiles("ground"):
        if tile is not None:
            print(x, y, tile.tileset, tile.id)
```

The loader treats textures as opaque. Pass whatever handle your renderer uses, keyed by the image name found in the map.

Tilesets stored in separate files are passed by their `source` name in the third argument, `external_tilesets`. A missing external tileset raises `LookupError`.

Other loading errors derive from `TiledError`:

- `JsonError` for an unreadable or malformed document.
- `NonUniqueLayerName` when two layers share a name.
- `TextureNotFound` when a tileset's image has no texture.

## What this package does not do

- It does not draw anything and talks to no graphics API. It provides layout, input and text-editing state, plus sprite rectangles for tiles; rendering is left to your own code.
- It has no ready-made widgets (buttons, windows, sliders and the like) and no event loop.
- It reads Tiled JSON only. It does not write maps.

## Running the tests

```
pip install .[test]
pytest
```