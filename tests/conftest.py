import os

import pytest


@pytest.fixture(autouse=True)
def isolate_autocommit_env(monkeypatch):
    """Remove AUTOCOMMIT_* variables set in the developer's shell.

    Several tests expect the default configuration; a header or log level
    exported by the user would otherwise leak into them.
    """
    for name in list(os.environ):
        if name.startswith("AUTOCOMMIT_"):
            monkeypatch.delenv(name, raising=False)
    yield
