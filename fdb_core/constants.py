# fdb_core/constants.py

TABLE_NAME = "dht"
DEFAULT_DB_PATH = "tmp/dht_db.sqlite"

ENV_STORAGE_PROVIDER = "FDB_STORAGE_PROVIDER"
ENV_DB_PATH = "FDB_DB_PATH"

NOT_OWNER_MSG = "You are not the owner!"
