import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; anything unknown is development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "workstream.config.production"

    if env in {"test", "testing"}:
        return "workstream.config.testing"

    return "workstream.config.development"
