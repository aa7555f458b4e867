"""Modes that decide how earlier releases are identified."""

from enum import Enum

from .exceptions import UnknownModeError


class Mode(str, Enum):
    """Whether GitHub Releases or Git tags identify earlier releases."""

    RELEASE = "release"
    TAG = "tag"

    @property
    def description(self) -> str:
        """Human readable description of the mode."""
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.value


_DESCRIPTIONS = {
    Mode.RELEASE: "Can only be used for GitHub repositories that utilise the GitHub Releases feature.",
    Mode.TAG: "Can be used with any Git repositories.",
}


def list_modes() -> list[Mode]:
    """Return all supported modes, release first."""
    return [Mode.RELEASE, Mode.TAG]


def get_mode_by_name(name: str) -> Mode:
    """Look up a mode by its canonical name."""
    for mode in list_modes():
        if mode.value == name:
            return mode
    raise UnknownModeError(name, [mode.value for mode in list_modes()])
