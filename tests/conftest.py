import os
import sys

import pytest

# garante a raiz do projeto no sys.path ao rodar a partir de tests/
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from models import db
from repository import PedidoRepository

TEST_CONFIG = {
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'TESTING': True,
}


def pedido_payload(**overrides):
    payload = {
        'cliente': 'Ana',
        'valor': 100,
        'data': '2024-01-01',
        'empresa': 'Acme',
        'vendedor': 'Carlos',
        'status': 'Pendente',
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def app():
    return create_app(dict(TEST_CONFIG))


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def repo(app):
    with app.app_context():
        yield PedidoRepository(db.session)
