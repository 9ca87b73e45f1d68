"""
Named resume variants persisted as one JSON document on disk.

File layout:
    {"current": "ml.tex", "variants": {"compiler.tex": {...record...}, ...}}

Variant order is insertion order. Records go in and come out as deep copies,
so callers can edit what they get back without touching stored state.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Union
import json
import logging
import os
import tempfile
import threading

from pydantic import Field, ValidationError

from resume_builder.core.errors import (
    InvalidVariantNameError,
    LastVariantError,
    VariantExistsError,
    VariantNotFoundError,
)
from resume_builder.core.schemas import ResumeRecord, VariantExport

logger = logging.getLogger(__name__)

DEFAULT_VARIANTS = ("compiler.tex", "ml.tex", "sf.tex")
VARIANT_SUFFIX = ".tex"


def normalize_variant_name(name: str) -> str:
    """
    Trim and make sure the name carries the .tex suffix.

    Examples:
    - "ml" -> "ml.tex"
    - "  sf.tex " -> "sf.tex"
    - "   " -> InvalidVariantNameError
    """
    t = (name or "").strip()
    if not t:
        raise InvalidVariantNameError("Please enter a variant name.")
    return t if t.endswith(VARIANT_SUFFIX) else f"{t}{VARIANT_SUFFIX}"


class VariantStore:
    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()
        self._variants: Dict[str, ResumeRecord] = {}
        self._current: Optional[str] = None
        self._load()

    # ----- persistence -----

    def _load(self) -> None:
        if not os.path.exists(self.path):
            self._seed_defaults()
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            variants = {
                name: ResumeRecord.model_validate(data)
                for name, data in payload.get("variants", {}).items()
            }
        except (OSError, ValueError, AttributeError, ValidationError) as e:
            logger.warning(f"Variant store at {self.path} is unreadable ({e}); reseeding defaults")
            self._seed_defaults()
            return

        if not variants:
            self._seed_defaults()
            return

        self._variants = variants
        current = payload.get("current")
        if not isinstance(current, str) or current not in variants:
            current = next(iter(variants))
        self._current = current

    def _seed_defaults(self) -> None:
        self._variants = {name: ResumeRecord() for name in DEFAULT_VARIANTS}
        self._current = DEFAULT_VARIANTS[0]
        self._save()

    def _save(self) -> None:
        payload = {
            "current": self._current,
            "variants": {
                name: record.model_dump(by_alias=True)
                for name, record in self._variants.items()
            },
        }
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".variants-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    # ----- queries -----

    def names(self) -> List[str]:
        with self._lock:
            return list(self._variants)

    @property
    def current(self) -> Optional[str]:
        return self._current

    def get(self, name: str) -> ResumeRecord:
        with self._lock:
            if name not in self._variants:
                raise VariantNotFoundError(name)
            return self._variants[name].model_copy(deep=True)

    # ----- mutations -----

    def set_current(self, name: str) -> None:
        with self._lock:
            if name not in self._variants:
                raise VariantNotFoundError(name)
            self._current = name
            self._save()

    def create(self, name: str, record: Optional[ResumeRecord] = None) -> str:
        """Add a variant (empty unless `record` is given) and select it."""
        name = normalize_variant_name(name)
        with self._lock:
            if name in self._variants:
                raise VariantExistsError(name)
            self._variants[name] = record.model_copy(deep=True) if record is not None else ResumeRecord()
            self._current = name
            self._save()
        logger.info(f"Created variant {name}")
        return name

    def update(self, name: str, record: ResumeRecord) -> None:
        with self._lock:
            if name not in self._variants:
                raise VariantNotFoundError(name)
            self._variants[name] = record.model_copy(deep=True)
            self._save()

    def upsert(self, name: str, record: ResumeRecord) -> str:
        """Store `record` under `name`, creating the variant if needed, and select it."""
        name = normalize_variant_name(name)
        with self._lock:
            self._variants[name] = record.model_copy(deep=True)
            self._current = name
            self._save()
        return name

    def delete(self, name: str) -> None:
        with self._lock:
            if name not in self._variants:
                raise VariantNotFoundError(name)
            if len(self._variants) <= 1:
                raise LastVariantError(name)
            del self._variants[name]
            if self._current == name:
                self._current = next(iter(self._variants))
            self._save()
        logger.info(f"Deleted variant {name}")

    # ----- JSON import/export -----

    def export_json(self, name: Optional[str] = None) -> VariantExport:
        name = name or self._current
        if name is None:
            raise VariantNotFoundError("")
        return VariantExport(
            variant=name,
            data=self.get(name),
            exported_at=datetime.now(timezone.utc),
        )

    def import_json(self, payload: Union[str, bytes, dict]) -> str:
        """
        Store an exported variant envelope and select it. Raises
        pydantic.ValidationError when the payload lacks `variant`/`data`.
        """
        if isinstance(payload, (str, bytes)):
            envelope = _ImportEnvelope.model_validate_json(payload)
        else:
            envelope = _ImportEnvelope.model_validate(payload)
        name = self.upsert(envelope.variant, envelope.data)
        logger.info(f"Imported variant {name}")
        return name


class _ImportEnvelope(VariantExport):
    # Exports from other tools may omit the timestamp
    exported_at: Optional[datetime] = Field(default=None, alias="exportedAt")
