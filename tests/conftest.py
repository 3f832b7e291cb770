import pytest

from category_store import CategoryStore


@pytest.fixture
def store(tmp_path):
    return CategoryStore(str(tmp_path / "private"))
