"""Typed webhook event models.

``WebhookDocument`` mirrors the JSON stored for each delivered GitHub webhook
and is decoded with msgspec. ``EventRecord`` is the normalised value the
dashboard engine consumes: every optional field has already been resolved to
its ``"Unknown"`` default, except ``repository_name`` which stays ``None`` so
repository filters can distinguish "absent" from a repository literally
named ``Unknown``.
"""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    import datetime as dt

UNKNOWN_LABEL: typ.Final = "Unknown"


class AccountRef(msgspec.Struct, kw_only=True):
    """GitHub account reference (``sender``, ``pull_request.user``)."""

    login: str | None = None


class PusherRef(msgspec.Struct, kw_only=True):
    """Pusher block of a ``push`` webhook."""

    name: str | None = None


class PullRequestRef(msgspec.Struct, kw_only=True):
    """The subset of a ``pull_request`` payload used for attribution."""

    user: AccountRef | None = None


class RepositoryRef(msgspec.Struct, kw_only=True):
    """Repository block of a webhook payload."""

    name: str | None = None


class WebhookDocument(msgspec.Struct, kw_only=True):
    """Stored webhook document as delivered by the event source.

    Attributes
    ----------
    id : str | int | None
        Document identifier assigned by the store.
    received_at : Any
        Raw ``receivedAt`` value. Parsed separately because stores emit ISO
        strings, epoch milliseconds or ``{seconds, nanoseconds}`` objects.
    github_event : str | None
        Value of the ``X-GitHub-Event`` header (``push``, ``pull_request``...).

    """

    id: str | int | None = None
    received_at: typ.Any = msgspec.field(default=None, name="receivedAt")
    github_event: str | None = msgspec.field(default=None, name="githubEvent")
    repository: RepositoryRef | None = None
    sender: AccountRef | None = None
    pusher: PusherRef | None = None
    pull_request: PullRequestRef | None = None

    def actor_candidates(self) -> typ.Iterator[str | None]:
        """Yield actor identifiers in priority order."""
        yield self.sender.login if self.sender is not None else None
        yield self.pusher.name if self.pusher is not None else None
        pr_user = self.pull_request.user if self.pull_request is not None else None
        yield pr_user.login if pr_user is not None else None


@dataclasses.dataclass(frozen=True, slots=True)
class EventRecord:
    """One webhook notification, normalised for aggregation."""

    id: str
    received_at: dt.datetime
    event_type: str = UNKNOWN_LABEL
    repository_name: str | None = None
    actor: str = UNKNOWN_LABEL

    @property
    def repository_label(self) -> str:
        """Return the repository name, or ``"Unknown"`` when absent."""
        return self.repository_name or UNKNOWN_LABEL
