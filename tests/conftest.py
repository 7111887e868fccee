from pathlib import Path
import pytest
from dotenv import load_dotenv
from helpers import mark_by_dir

load_dotenv()

TESTS = Path(__file__).parent

def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, TESTS / "php_security_audit" / "core", pytest.mark.unit)
    mark_by_dir(items, TESTS / "php_security_audit" / "shared", pytest.mark.unit)
    mark_by_dir(items, TESTS / "php_security_audit" / "infra", pytest.mark.integration)
    mark_by_dir(items, TESTS / "php_security_audit" / "app", pytest.mark.e2e)
