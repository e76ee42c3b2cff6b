"""
Dev utility: create the shortener table in the configured database.

Reads DATABASE_URL from the environment or .env, like the app does.
"""

import argparse

from shortlinks.core.config import get_settings
from shortlinks.db.session import build_engine
from shortlinks.db.store import SqlUrlStore


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--database-url", default=None, help="overrides DATABASE_URL")
    args = parser.parse_args()

    database_url = args.database_url or get_settings().database_url

    store = SqlUrlStore(build_engine(database_url))
    try:
        store.create_schema()
    finally:
        store.close()

    print(f"shortener table ready at {store.engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
