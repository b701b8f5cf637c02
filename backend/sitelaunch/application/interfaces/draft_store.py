"""Durable local storage for the signup wizard draft."""

from abc import ABC, abstractmethod

from sitelaunch.domain.entities.wizard_draft import WizardDraft


class DraftStore(ABC):
    """Port for persisting a single wizard draft across restarts."""

    @abstractmethod
    def load(self) -> WizardDraft | None:
        """Return the saved draft, or None if there is none (or it is unreadable)."""
        ...

    @abstractmethod
    def save(self, draft: WizardDraft) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
