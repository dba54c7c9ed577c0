import os
import tempfile

# Point the app at a throwaway database before any app module is imported
_db_dir = tempfile.mkdtemp(prefix="secret-messages-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_db_dir}/test.db")
