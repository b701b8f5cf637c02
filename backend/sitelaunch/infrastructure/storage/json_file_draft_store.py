"""JSON file-backed storage for the signup wizard draft."""

import json
import logging
from pathlib import Path

from sitelaunch.application.interfaces import DraftStore
from sitelaunch.domain.entities.wizard_draft import WizardDraft

logger = logging.getLogger(__name__)


class JsonFileDraftStore(DraftStore):
    """Keeps one draft in a JSON file, rewritten on every save."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def load(self) -> WizardDraft | None:
        if not self._path.exists():
            return None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return WizardDraft.from_dict(raw)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.error("Error loading saved form data from %s: %s", self._path, exc)
            return None

    def save(self, draft: WizardDraft) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Write-then-rename so a crash never leaves a half-written draft.
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(draft.to_dict(), ensure_ascii=False), encoding="utf-8")
        tmp.replace(self._path)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
