"""Create the first admin account from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME."""

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from workstream.config import get_settings_module
from workstream.database.bootstrap import ensure_admin_user


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    admin_id = ensure_admin_user(
        db_config,
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD,
        name=settings.ADMIN_NAME,
    )
    if admin_id is None:
        print("OK: An admin account already exists, nothing to seed.")
        return

    print(
        f"OK: Created admin #{admin_id} ({settings.ADMIN_EMAIL}) -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
