import pytest
from fastapi.testclient import TestClient

from resume_builder.api.dependencies import get_variant_store
from resume_builder.core.variant_store import VariantStore
from resume_builder.main import app


@pytest.fixture
def store(tmp_path):
    return VariantStore(str(tmp_path / "variants.json"))


@pytest.fixture(autouse=True)
def _isolated_store(store):
    """Every request in every test hits a throwaway store, never ./data."""
    app.dependency_overrides[get_variant_store] = lambda: store
    yield
    app.dependency_overrides.pop(get_variant_store, None)


@pytest.fixture
def client():
    return TestClient(app)
