import logging

from flask import current_app
from pymongo import MongoClient, monitoring
from pymongo.errors import PyMongoError

from models.employee import EMPLOYEE_COLLECTION

logger = logging.getLogger(__name__)

# Readiness codes reported by /health
DISCONNECTED = 0
CONNECTED = 1
CONNECTING = 2
DISCONNECTING = 3


class ConnectionStateListener(monitoring.TopologyListener):
    """Keeps ``MongoStore.state`` in step with the driver's view of the deployment.

    Only applies once ``connect()`` has finished; until then the store owns the state.
    """

    def __init__(self, store):
        self.store = store

    def opened(self, event):
        pass

    def description_changed(self, event):
        if self.store.client is None:
            return
        readable = event.new_description.has_readable_server()
        state = CONNECTED if readable else DISCONNECTED
        if state != self.store.state:
            logger.warning(f"MongoDB connection state changed: {self.store.state} -> {state}")
            self.store.state = state

    def closed(self, event):
        pass


class MongoStore:
    """Process-scoped MongoDB connection shared by every request.

    Created once at startup and attached to the Flask app; handlers reach it
    through ``get_store()`` instead of a module global.
    """

    def __init__(self, client=None, db_name=None):
        self.client = client
        self.db_name = db_name
        self.state = CONNECTED if client is not None else DISCONNECTED
        self.listener = ConnectionStateListener(self)

    def connect(self, uri: str, db_name: str | None = None, timeout_ms: int = 30000) -> "MongoStore":
        """Open the client and ping the server once. Raises PyMongoError on failure."""
        self.state = CONNECTING
        try:
            client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, event_listeners=[self.listener])
            client.admin.command("ping")
        except PyMongoError:
            self.state = DISCONNECTED
            raise

        self.client = client
        self.db_name = db_name or client.get_default_database(default="test").name
        self.state = CONNECTED
        logger.info(f"MongoDB connected (database: {self.db_name})")
        return self

    def close(self):
        if self.client is None:
            return
        self.state = DISCONNECTING
        self.client.close()
        self.client = None
        self.state = DISCONNECTED

    @property
    def db(self):
        return self.client[self.db_name]

    @property
    def employees(self):
        return self.db[EMPLOYEE_COLLECTION]

    def init_app(self, app):
        app.extensions["mongo"] = self


def get_store() -> MongoStore:
    return current_app.extensions["mongo"]
