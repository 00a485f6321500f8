import os
from pathlib import Path
import sys

# Ensure project root is on sys.path for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Load .env into os.environ so the live test can pick up SYNTHETIC_API_KEY
from autofix.config_adapter import DotEnvConfigSource  # noqa: E402

for key, val in DotEnvConfigSource(path=ROOT / ".env").items().items():
    os.environ.setdefault(key, val)
