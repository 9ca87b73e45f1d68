from functools import lru_cache

from resume_builder.core.config import get_settings
from resume_builder.core.variant_store import VariantStore


@lru_cache(maxsize=1)
def _store() -> VariantStore:
    return VariantStore(get_settings().store_path)


def get_variant_store() -> VariantStore:
    """FastAPI dependency; tests override it with a temp-path store."""
    return _store()
