"""Textual host adapter for ezcontrols."""

from .controller import TextualControlsAdapter, TextualControlsHooks

__all__ = ["TextualControlsAdapter", "TextualControlsHooks"]
