"""
Shared fixtures: an application bound to a throwaway SQLite file.
"""

import pytest

from campaign_admin import create_app, db
from campaign_admin.repository import Storage


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}",
        "SEED_DEMO_DATA": False,
        "PROGRAMS_IMPORT_PATH": None,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    with app.app_context():
        yield Storage(db.session)


@pytest.fixture
def make_campaign(storage):
    def _make(**overrides):
        data = {
            "nombre_campania": "MBA Ejecutivo 2024",
            "medio": "Google Ads",
            "programa_interes": "MBA Ejecutivo",
            "tipo_campana": "Conversión",
        }
        data.update(overrides)
        return storage.campaigns.create(data)
    return _make
