from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from smsgate.app import create_app
from smsgate.config import Settings
from smsgate.services.rate_limiter import RateLimiterService


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("SMSGATE_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_service(clock):
    def _make(phone_limit: int = 1, account_limit: int = 5, **kwargs) -> RateLimiterService:
        return RateLimiterService(
            phone_number_limit=phone_limit,
            account_limit=account_limit,
            clock=clock,
            **kwargs,
        )

    return _make


@pytest.fixture()
def service(make_service) -> RateLimiterService:
    return make_service()


@pytest.fixture()
def settings() -> Settings:
    return Settings(app_name="SMS Rate Limiter (test)")


@pytest.fixture()
def app(settings, service) -> FastAPI:
    return create_app(settings, service=service)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
