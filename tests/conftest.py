"""Root conftest — points DAYNOTES_DIR at a temp dir BEFORE daynotes is imported.

Keeps a developer's real ~/.daynotes/settings.toml and .env out of the tests.
"""

import os
import tempfile

# Force-set (not setdefault) to prevent real env vars from leaking into tests
os.environ["DAYNOTES_DIR"] = tempfile.mkdtemp(prefix="daynotes-test-")
for _name in ("DAYNOTES_SORT_ORDER", "DAYNOTES_TIMEZONE", "DAYNOTES_LOG_LEVEL"):
    os.environ.pop(_name, None)
