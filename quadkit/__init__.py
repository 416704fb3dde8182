"""Layout cursor, input state, text editing and Tiled map loading for game UIs."""

__version__ = "0.1.0"