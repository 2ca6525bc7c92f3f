import importlib.util
from unittest.mock import MagicMock, Mock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

import app as app_module
import config
import models
from models import CONNECTED, CONNECTING, DISCONNECTED, MongoStore


def test_create_app_requires_mongo_uri(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "MONGO_URI", None)

    with pytest.raises(app_module.ConfigurationError, match="MONGO_URI"):
        app_module.create_app(test_config={"UPLOADS_DIR": str(tmp_path)})


def test_main_exits_without_mongo_uri(monkeypatch):
    monkeypatch.setattr(config, "MONGO_URI", None)

    with pytest.raises(SystemExit) as exc:
        app_module.main()
    assert exc.value.code == 1


def test_main_exits_when_connection_fails(monkeypatch):
    monkeypatch.setattr(config, "MONGO_URI", "mongodb://db.invalid:27017/onboarding")
    client = Mock()
    client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
    monkeypatch.setattr(models, "MongoClient", Mock(return_value=client))

    with pytest.raises(SystemExit) as exc:
        app_module.main()
    assert exc.value.code == 1


def test_connect_failure_leaves_store_disconnected(monkeypatch):
    client = Mock()
    client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
    monkeypatch.setattr(models, "MongoClient", Mock(return_value=client))

    store = MongoStore()
    with pytest.raises(ServerSelectionTimeoutError):
        store.connect("mongodb://db.invalid:27017/onboarding", timeout_ms=10)
    assert store.state == DISCONNECTED
    assert store.client is None


def test_connect_uses_database_from_uri(monkeypatch):
    client = MagicMock()
    client.get_default_database.return_value.name = "hr"
    mongo_client = Mock(return_value=client)
    monkeypatch.setattr(models, "MongoClient", mongo_client)

    store = MongoStore().connect("mongodb://localhost:27017/hr", timeout_ms=500)

    mongo_client.assert_called_once_with(
        "mongodb://localhost:27017/hr", serverSelectionTimeoutMS=500, event_listeners=[store.listener]
    )
    client.admin.command.assert_called_once_with("ping")
    assert store.state == CONNECTED
    assert store.db_name == "hr"

    store.close()
    assert store.state == DISCONNECTED
    client.close.assert_called_once()


def test_create_app_creates_uploads_dir(store, tmp_path):
    uploads = tmp_path / "a" / "b"
    app_module.create_app(store=store, test_config={"UPLOADS_DIR": str(uploads)})
    assert uploads.is_dir()


def test_topology_events_before_connect_finishes_are_ignored():
    store = MongoStore()
    store.state = CONNECTING
    event = Mock()
    event.new_description.has_readable_server.return_value = False

    store.listener.description_changed(event)

    assert store.state == CONNECTING


def test_load_app_exits_without_mongo_uri(monkeypatch):
    monkeypatch.setattr(config, "MONGO_URI", None)

    with pytest.raises(SystemExit) as exc:
        app_module.load_app()
    assert exc.value.code == 1


def test_importing_app_without_mongo_uri_exits(monkeypatch):
    monkeypatch.setenv("CREATE_APP_ON_IMPORT", "1")
    monkeypatch.setattr(config, "MONGO_URI", None)
    spec = importlib.util.spec_from_file_location("app_under_gunicorn", app_module.__file__)
    module = importlib.util.module_from_spec(spec)

    with pytest.raises(SystemExit) as exc:
        spec.loader.exec_module(module)
    assert exc.value.code == 1
