import importlib
import os
from types import ModuleType


def get_settings_module() -> str:
    # Environment comes from APP_ENV, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return ".production"

    if env in {"test", "testing"}:
        return ".testing"

    return ".development"


def load_settings() -> ModuleType:
    return importlib.import_module(get_settings_module(), __name__)
