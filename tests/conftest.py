import os
import tempfile

# must happen before the app (and its engine) is imported
_TMP = tempfile.mkdtemp(prefix="text-alchemist-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP, "test.db")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient

from schemas import ConversionOptions, HumanizationOptions


@pytest.fixture(scope="session")
def app():
    from main import app
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload_dir():
    from config import Config
    return Config.UPLOAD_DIR


def make_options(from_format="txt", to_format="txt", operation="convert"):
    return ConversionOptions(from_format=from_format, to_format=to_format, operation=operation)


def make_humanize_options(**overrides):
    values = dict(
        level="moderate",
        style="standard",
        fix_grammar=False,
        reorder_sentences=True,
        add_synonyms=False,
    )
    values.update(overrides)
    return HumanizationOptions(**values)
