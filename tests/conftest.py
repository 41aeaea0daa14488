from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from accounts.models import User
from catalog.models import Category, Product

FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=dt_timezone.utc)


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(
        email="admin@test.com",
        password="testpass123",
        first_name="Admin",
        last_name="User",
    )


@pytest.fixture
def manager_user(db):
    return User.objects.create_user(
        email="manager@test.com",
        password="testpass123",
        first_name="Manager",
        last_name="User",
        role=User.Role.MANAGER,
    )


@pytest.fixture
def customer_user(db):
    return User.objects.create_user(
        email="customer@test.com",
        password="testpass123",
        first_name="Jean",
        last_name="Dupont",
        role=User.Role.CUSTOMER,
    )


@pytest.fixture
def category(db):
    return Category.objects.create(name="Accessories", slug="accessories")


@pytest.fixture
def product(category):
    return Product.objects.create(
        category=category,
        name="Leather Wallet",
        slug="leather-wallet",
        sku="TST-001",
        regular_price=Decimal("25.00"),
    )


@pytest.fixture
def stocked_product(category):
    return Product.objects.create(
        category=category,
        name="Canvas Tote",
        slug="canvas-tote",
        sku="TST-002",
        regular_price=Decimal("12.50"),
        manage_stock=True,
        stock_quantity=40,
    )


@pytest.fixture
def draft_product(category):
    return Product.objects.create(
        category=category,
        name="Prototype Lamp",
        slug="prototype-lamp",
        sku="TST-003",
        regular_price=Decimal("80.00"),
        status=Product.Status.DRAFT,
    )


# ---------------------------------------------------------------------------
# In-memory collaborators
# ---------------------------------------------------------------------------

class FakeOptions:
    def __init__(self, values=None):
        self.values = dict(values or {})

    def get(self, name, default=None):
        return self.values.get(name, default)

    def set(self, name, value):
        self.values[name] = value


class FakeScheduler:
    """Records every registration so duplicates can be detected."""

    def __init__(self):
        self.jobs = {}
        self.registrations = []

    def is_scheduled(self, name):
        return name in self.jobs

    def schedule(self, name, start_time, recurrence):
        self.registrations.append((name, start_time, recurrence))
        self.jobs[name] = (start_time, recurrence)

    def unschedule(self, name):
        return 1 if self.jobs.pop(name, None) is not None else 0


class FakeCatalog:
    def __init__(self, ids=()):
        self.ids = list(ids)
        self.requested_statuses = []

    def list_ids(self, status):
        self.requested_statuses.append(status)
        return list(self.ids)


class FakeDirectory:
    """Customer ids, returned in rotating order when random order is asked."""

    def __init__(self, ids=()):
        self.ids = list(ids)
        self.requested_roles = []
        self._cursor = 0

    def list_ids(self, role, *, limit=None, random_order=False):
        self.requested_roles.append(role)
        ids = list(self.ids)
        if random_order and ids:
            shift = self._cursor % len(ids)
            ids = ids[shift:] + ids[:shift]
            self._cursor += 1
        return ids[:limit] if limit is not None else ids


@dataclass
class FakeOrder:
    number: int
    lines: list = field(default_factory=list)
    customer_id: int | None = None
    totals_calculated: bool = False
    status: str = "pending"
    note: str = ""
    date_created: datetime | None = None


class FakeOrderStore:
    """Order store keeping orders in lists; ``fail_on_save`` breaks the n-th save."""

    def __init__(self, fail_on_save=None):
        self.created = []
        self.saved = []
        self.fail_on_save = fail_on_save

    def create(self):
        order = FakeOrder(number=len(self.created) + 1)
        self.created.append(order)
        return order

    def add_product(self, order, product_id, quantity=1):
        order.lines.append((product_id, quantity))

    def set_customer_id(self, order, customer_id):
        order.customer_id = customer_id

    def calculate_totals(self, order):
        order.totals_calculated = True

    def update_status(self, order, status, note=""):
        order.status = status
        order.note = note

    def set_date_created(self, order, when):
        order.date_created = when

    def save(self, order):
        if self.fail_on_save is not None and len(self.saved) + 1 == self.fail_on_save:
            raise RuntimeError("order store unavailable")
        self.saved.append(order)
        return order


@pytest.fixture
def fake_options():
    return FakeOptions()


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
