import certifi

from pymongo import MongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from flask import current_app

from .storage import JsonBookStore, MongoBookStore, ensure_indexes


def init_store(app):
    uri = app.config.get("MONGODB_URI", "")
    app.extensions["mongo_client"] = None

    if uri:
        store = _connect_mongo_store(app, uri)
        if store is not None:
            app.extensions["book_store"] = store
            return

    data_file = app.config["BOOKS_DATA_FILE"]
    store = JsonBookStore(data_file)
    if store.ensure_exists():
        app.logger.warning("Books file %s was missing; created an empty collection", data_file)

    app.extensions["book_store"] = store
    app.logger.info("Using JSON book store at %s", data_file)


def _connect_mongo_store(app, uri):
    db_name = app.config.get("MONGODB_DB_NAME", "bookshelf")

    try:
        client_options = {
            "server_api": ServerApi("1"),
            "connectTimeoutMS": app.config.get("MONGODB_CONNECT_TIMEOUT_MS", 20000),
            "socketTimeoutMS": app.config.get("MONGODB_SOCKET_TIMEOUT_MS", 20000),
            "serverSelectionTimeoutMS": app.config.get("MONGODB_SERVER_SELECTION_TIMEOUT_MS", 30000),
        }

        if app.config.get("MONGODB_TLS", True):
            ca_file = app.config.get("MONGODB_TLS_CA_FILE") or certifi.where()
            client_options.update(
                {
                    "tls": True,
                    "tlsCAFile": ca_file,
                }
            )

        client = MongoClient(uri, **client_options)
        client.admin.command("ping")
        db = client[db_name]
        ensure_indexes(db)
    except PyMongoError as exc:
        app.logger.exception("Unable to connect to MongoDB, falling back to the JSON book store: %s", exc)
        return None

    app.extensions["mongo_client"] = client
    app.logger.info("Using MongoDB book store in database '%s'", db_name)
    return MongoBookStore(db)


def get_store():
    return current_app.extensions["book_store"]
