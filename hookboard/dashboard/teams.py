"""Team labels derived from repository names.

Repositories are named ``<prefix><separator><team>``, for example
``teamA-svc``. The default labeler splits on the first separator; a fixed
positional prefix can be configured instead for estates whose names have no
separator. Names that do not follow the convention are labelled ``Unknown``
rather than being truncated into nonsense.
"""

from __future__ import annotations

import dataclasses
import typing as typ

from hookboard.events.models import UNKNOWN_LABEL

from .errors import DashboardConfigError

if typ.TYPE_CHECKING:
    from hookboard.events.models import EventRecord

DEFAULT_TEAM_SEPARATOR: typ.Final = "-"


@dataclasses.dataclass(frozen=True, slots=True)
class TeamLabeler:
    """Derive team labels from repository names.

    Attributes
    ----------
    separator
        Delimiter between the repository prefix and the team name.
    prefix_length
        When set, drop this many leading characters instead of splitting on
        ``separator``.

    Examples
    --------
    >>> TeamLabeler().label_for("teamA-svc")
    'svc'
    >>> TeamLabeler(prefix_length=5).label_for("teamA-svc")
    '-svc'
    >>> TeamLabeler().label_for(None)
    'Unknown'

    """

    separator: str = DEFAULT_TEAM_SEPARATOR
    prefix_length: int | None = None

    def __post_init__(self) -> None:
        """Reject settings that cannot produce a label."""
        if not self.separator:
            raise DashboardConfigError.empty_separator()
        if self.prefix_length is not None and self.prefix_length < 1:
            raise DashboardConfigError.not_positive(
                "team prefix length", self.prefix_length
            )

    def label_for(self, repository_name: str | None) -> str:
        """Return the team label for ``repository_name``."""
        if not repository_name or repository_name == UNKNOWN_LABEL:
            return UNKNOWN_LABEL
        if self.prefix_length is not None:
            team = repository_name[self.prefix_length :]
        else:
            _prefix, found, team = repository_name.partition(self.separator)
            if not found:
                return UNKNOWN_LABEL
        return team or UNKNOWN_LABEL

    def __call__(self, event: EventRecord) -> str:
        """Categorize ``event`` by team."""
        return self.label_for(event.repository_name)
