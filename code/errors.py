"""Exception taxonomy for level generation.

Template and size errors are recoverable: the layout engine catches them at
the point where a room is being chosen and substitutes a blank procedural
room. Only ``InvalidParametersError`` and ``GenerationFailure`` are meant to
reach callers of ``level_generator``.
"""

from __future__ import annotations

from typing import Optional

from geometry import Rect


class LevelGenerationError(Exception):
    """Base class for every error raised by the generator."""


class TemplateError(LevelGenerationError):
    """A room template could not be used."""

    def __init__(self, message: str, template_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.template_name = template_name


class TemplateParseError(TemplateError):
    """Ragged rows, an unknown glyph, or an empty pattern."""

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        character: Optional[str] = None,
    ) -> None:
        super().__init__(message, template_name)
        self.character = character


class TemplateNotFoundError(TemplateError):
    """A named template is missing, or a category has no templates."""


class SizeConstraintViolation(LevelGenerationError):
    """An instantiated room would not fit inside the canvas or its grid footprint."""

    def __init__(self, bounds: Rect, canvas_width: int, canvas_height: int) -> None:
        super().__init__(
            f"Room bounds {bounds.to_tuple()} exceed {canvas_width}x{canvas_height} area"
        )
        self.bounds = bounds
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height


class InvalidParametersError(LevelGenerationError, ValueError):
    """Caller supplied generation parameters that cannot describe a level."""


class GenerationFailure(LevelGenerationError):
    """No level could be produced, e.g. for an unimplemented level type."""
