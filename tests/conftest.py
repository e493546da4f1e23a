# tests/conftest.py
import os
import tempfile

# Must run before bsg_helpdesk.core.database creates the engine
_db_dir = tempfile.mkdtemp(prefix="bsg_helpdesk_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SEED_DEMO_DATA"] = "true"
os.environ["API_TOKEN"] = "test-token"
