"""Interfaces for the interactive collaborators the dispatcher talks to."""

from typing import List, Optional, Protocol, Sequence


class SaveConfirmation(Protocol):
    """Lets a user narrow a save request.

    ``confirm`` returns the approved subset of ``paths``, or ``None`` when the
    user cancelled the save altogether.
    """

    def confirm(self, paths: Sequence[str]) -> Optional[List[str]]: ...


class PendingChangesListener(Protocol):
    """Notified whenever version-control status has been refreshed."""

    def on_status_updated(self) -> None: ...


class AutoApproveSaves:
    """Approves every save request unchanged."""

    def confirm(self, paths: Sequence[str]) -> Optional[List[str]]:
        return list(paths)


class NoPendingChangesView:
    """Listener used when nothing displays pending changes."""

    def on_status_updated(self) -> None:
        pass
