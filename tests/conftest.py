import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path to allow `import agents`, `import models`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from connectors.product_repository import InMemoryProductRepository  # noqa: E402
from models.store import ProductStore  # noqa: E402


@pytest.fixture
def repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def store(repository) -> ProductStore:
    return ProductStore(repository)
