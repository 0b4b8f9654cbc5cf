from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from pymongo.errors import ServerSelectionTimeoutError

from shopreco.api.deps import explanation_service, interaction_repo, product_repo
from shopreco.domain.errors import RetrievalError
from shopreco.domain.models.interaction import Interaction
from shopreco.domain.models.product import Product
from shopreco.domain.services.explanation_svc import ExplanationService, TemplateExplanationGenerator
from shopreco.main import app

BASE = "http://test"
API = "/api"


def make_product(pid, category, popularity=0, price=49.99, name=None):
    return Product(
        id=pid,
        name=name or f"Product {pid}",
        category=category,
        price=price,
        description=f"{category} item {pid}",
        popularity=popularity,
    )


def make_interaction(product_id, kind, user_id="u1"):
    return Interaction(user_id=user_id, product_id=product_id, interaction_type=kind)


class FakeProductRepo:
    """In-memory catalog store."""

    def __init__(self, products, fail: bool = False):
        self.products = list(products)
        self.fail = fail

    async def list_all(self):
        if self.fail:
            raise RetrievalError("catalog", "connection refused")
        return list(self.products)

    async def get_by_id(self, product_id):
        if self.fail:
            raise RetrievalError("catalog", "connection refused")
        for p in self.products:
            if str(p.id) == str(product_id):
                return p
        return None


class FakeInteractionRepo:
    """In-memory interaction store."""

    def __init__(self, interactions=(), fail: bool = False):
        self.rows = list(interactions)
        self.fail = fail

    async def list_for_user(self, user_id):
        if self.fail:
            raise RetrievalError("interactions", "timeout")
        return [i for i in self.rows if i.user_id == user_id]

    async def add(self, user_id, product_id, interaction_type):
        created = Interaction(
            user_id=user_id,
            product_id=product_id,
            interaction_type=interaction_type,
            timestamp=datetime.now(timezone.utc),
        )
        self.rows.append(created)
        return created

    async def delete_for_user(self, user_id):
        before = len(self.rows)
        self.rows = [i for i in self.rows if i.user_id != user_id]
        return before - len(self.rows)


class FakeRedis:
    def __init__(self, broken: bool = False):
        self.data = {}
        self.broken = broken

    async def get(self, key):
        if self.broken:
            raise ConnectionError("redis down")
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        if self.broken:
            raise ConnectionError("redis down")
        self.data[key] = value


@pytest.fixture
def catalog():
    return [
        make_product(1, "Audio", popularity=80, name="Studio Headphones", price=199.0),
        make_product(2, "Audio", popularity=10, name="Earbuds", price=59.5),
        make_product(3, "Gaming", popularity=50, name="Gamepad", price=39.99),
    ]


@pytest.fixture
def catalog_repo(catalog):
    return FakeProductRepo(catalog)


@pytest.fixture
def interactions_repo():
    return FakeInteractionRepo()


@pytest.fixture
def explainer():
    return ExplanationService(TemplateExplanationGenerator())


@pytest.fixture
async def client(catalog_repo, interactions_repo, explainer):
    app.dependency_overrides[product_repo] = lambda: catalog_repo
    app.dependency_overrides[interaction_repo] = lambda: interactions_repo
    app.dependency_overrides[explanation_service] = lambda: explainer
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    app.dependency_overrides.clear()


class FakeCursor:
    def __init__(self, docs, fail: bool = False):
        self.docs = docs
        self.fail = fail

    async def to_list(self, length=None):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers available")
        return list(self.docs)


class FakeCollection:
    """The slice of a Motor collection the repositories use."""

    def __init__(self, docs=(), fail: bool = False):
        self.docs = [dict(d) for d in docs]
        self.fail = fail

    @staticmethod
    def _matches(doc, query):
        for key, cond in query.items():
            if isinstance(cond, dict) and "$in" in cond:
                if doc.get(key) not in cond["$in"]:
                    return False
            elif doc.get(key) != cond:
                return False
        return True

    @staticmethod
    def _project(doc):
        return {k: v for k, v in doc.items() if k != "_id"}

    def find(self, query, projection=None):
        return FakeCursor([self._project(d) for d in self.docs if self._matches(d, query)], fail=self.fail)

    async def find_one(self, query, projection=None):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers available")
        for d in self.docs:
            if self._matches(d, query):
                return self._project(d)
        return None

    async def insert_one(self, doc):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers available")
        self.docs.append(dict(doc, _id=len(self.docs) + 1))

    async def delete_many(self, query):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers available")
        kept = [d for d in self.docs if not self._matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted)
