"""Renderers that draw a DuelView and collect raw input lines."""

from .scripted_renderer import ScriptedRenderer
from .text_renderer import TextRenderer

__all__ = ["ScriptedRenderer", "TextRenderer"]
