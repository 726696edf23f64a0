import sys
from pathlib import Path
import os


# Ensure project src is on path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

# Keep tests offline: never reach the live fact-check API
os.environ.setdefault("FACT_CHECK_LIVE_ENABLED", "false")
os.environ.setdefault("CORS_ORIGINS", '["*"]')
