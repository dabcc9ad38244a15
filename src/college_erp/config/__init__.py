import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; development is the default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "college_erp.config.production"

    if env in {"test", "testing"}:
        return "college_erp.config.testing"

    return "college_erp.config.development"
