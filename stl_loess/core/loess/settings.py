"""Per-pass LOESS smoother settings."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ConfigurationError

SUPPORTED_DEGREES = (0, 1, 2)


@dataclass(frozen=True)
class LoessSettings:
    """Width, degree and jump of one LOESS smoothing pass.

    The width is bumped to an odd number of at least 3. When no jump is
    given it defaults to roughly a tenth of the (adjusted) width.
    """

    width: int
    degree: int = 1
    jump: int | None = None

    def __post_init__(self):
        if self.width is None:
            raise ConfigurationError("The LOESS width must be set.")
        if self.width < 1:
            raise ConfigurationError(f"The LOESS width must be positive, but is {self.width}.")
        if self.degree not in SUPPORTED_DEGREES:
            raise ConfigurationError(
                f"The LOESS degree must be one of {SUPPORTED_DEGREES}, but is {self.degree}."
            )

        width = max(3, int(self.width))
        if width % 2 == 0:
            width += 1
        object.__setattr__(self, "width", width)

        if self.jump is None:
            object.__setattr__(self, "jump", max(1, int(0.1 * width + 0.9)))
        elif self.jump < 1:
            raise ConfigurationError(f"The LOESS jump must be positive, but is {self.jump}.")
        else:
            object.__setattr__(self, "jump", int(self.jump))
