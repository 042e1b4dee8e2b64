"""JSON-file reference records for command-line cross-referencing."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from certverify import logger
from certverify.exceptions import ReferenceDataError
from certverify.typing.models import ReferenceRecord

if TYPE_CHECKING:
    from pathlib import Path


class ReferenceStore(BaseModel):
    """In-memory snapshot of reference certificates and revoked numbers."""

    model_config = ConfigDict(extra="forbid")

    certificates: list[ReferenceRecord] = Field(default_factory=list)
    blacklist: list[str] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> ReferenceStore:
        """Load a reference file.

        Accepts either ``{"certificates": [...], "blacklist": [...]}`` or a bare
        list of certificate records. Blacklist entries may be strings or
        objects with a ``certNumber`` key.

        Args:
            path (Path): JSON file path.

        Raises:
            ReferenceDataError: If the file is missing or malformed.

        Returns:
            ReferenceStore: Loaded snapshot.
        """
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ReferenceDataError(message=f"Cannot read reference file {path}: {exc}") from exc

        if isinstance(payload, list):
            payload = {"certificates": payload}
        if not isinstance(payload, dict):
            raise ReferenceDataError(message=f"Reference file {path} must hold an object or a list")

        blacklist = payload.get("blacklist") or []
        if not isinstance(blacklist, list):
            raise ReferenceDataError(message=f"Blacklist in reference file {path} must be a list")
        payload = {**payload, "blacklist": [_blacklist_entry(entry) for entry in blacklist]}
        try:
            store = cls.model_validate(payload)
        except ValidationError as exc:
            raise ReferenceDataError(message=f"Invalid reference file {path}: {exc}") from exc

        logger.info(
            "Reference records loaded",
            extra={"certificates": len(store.certificates), "blacklist": len(store.blacklist)},
        )
        return store


def _blacklist_entry(entry: Any) -> str:
    if isinstance(entry, dict):
        entry = entry.get("certNumber", entry.get("cert_number", ""))
    return str(entry).strip().upper()
