# tests/conftest.py
import os
import tempfile

# Settings are cached on first import, so the environment is fixed before the app loads
_DB_DIR = tempfile.mkdtemp(prefix="plant-health-tests-")

os.environ["ENVIRONMENT"] = "test"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-plant-health-api-0123456789"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'default.db')}"
os.environ["TEST_DB_DIR"] = _DB_DIR
