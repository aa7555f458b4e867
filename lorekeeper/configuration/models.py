"""Models for configuration between CLI arguments and environment variables."""

import re
from dataclasses import dataclass

from lorekeeper.release_notes.modes import Mode


@dataclass(frozen=True)
class ReleaseNotesConfig:
    """Reconciled configuration for a single release notes run."""

    tag_name: str
    release_candidate_pattern: re.Pattern[str]
    current_branch: str
    default_branch: str
    mode: Mode
