import os
# Force SQLite for tests -> MUST be done before importing perfumeria.config
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from perfumeria import create_app, db
from perfumeria.services.tasas_service import RateCache


class FakeFetcher:
    """Proveedor de tasas falso: cuenta llamadas y puede fallar a pedido."""
    def __init__(self, rates):
        self.rates = rates
        self.calls = 0
        self.error = None

    def __call__(self):
        self.calls += 1
        if self.error:
            raise self.error
        return dict(self.rates)


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def avanzar(self, minutos):
        self.now += minutos * 60


@pytest.fixture
def app():
    app = create_app()
    app.config.update({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:"
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dolar_fetcher():
    return FakeFetcher({'ARS': 1000.0})


@pytest.fixture
def exchange_fetcher():
    return FakeFetcher({'USD': 1.0, 'ARS': 1000.0, 'EUR': 0.92})


@pytest.fixture
def tasas_fake(app, clock, dolar_fetcher, exchange_fetcher):
    """Reemplaza los caches de la app por caches con proveedores falsos."""
    app.extensions['tasas'] = {
        'dolar': RateCache(dolar_fetcher, nombre='dolar', clock=clock),
        'exchange': RateCache(exchange_fetcher, nombre='exchange', clock=clock),
    }
    return app.extensions['tasas']
