"""
Pytest configuration and fixtures for the restock test suite
"""
import itertools
import os
from datetime import datetime, timedelta, timezone

# 测试环境配置必须在导入restock模块之前设置
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "restockhub.settings")
os.environ.setdefault("DJANGO_ENV", "testing")

import pytest

from restock.domain import AddItemRequest, RestockSessionDomainService
from restock.infrastructure import RestockInfrastructureFactory

BASE_TIME = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    """每次调用前进一秒的时钟"""

    def __init__(self, start: datetime = BASE_TIME):
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


def sequential_ids(prefix: str = "id"):
    """Create an id generator returning id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def flour_request(**overrides) -> AddItemRequest:
    """Build the add-item request used throughout the scenarios"""
    values = dict(
        product_name="Flour",
        quantity=10,
        supplier_name="Acme",
        supplier_email="a@acme.com",
    )
    values.update(overrides)
    return AddItemRequest(**values)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def domain_service(clock):
    """Domain service with deterministic ids and clock"""
    return RestockSessionDomainService(id_generator=sequential_ids(), clock=clock)


@pytest.fixture
def session(domain_service):
    """Empty draft session owned by user-1"""
    return domain_service.create_session("session-1", "user-1", created_at=BASE_TIME)


@pytest.fixture
def factory():
    return RestockInfrastructureFactory(id_generator=sequential_ids("gen"))


@pytest.fixture
def app_service(factory):
    """Application service wired with in-memory repositories and the template renderer"""
    return factory.create_application_service()
