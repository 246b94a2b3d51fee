"""Health report for the Channel server."""
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Optional
import time

VERSION_FILE = Path(__file__).resolve().parents[2] / "VERSION"

# process start, recorded at import
_START_TIME = time.time()


@lru_cache(maxsize=1)
def _version() -> str:
    try:
        return VERSION_FILE.read_text(encoding="utf-8").strip() or "unknown"
    except FileNotFoundError:
        return "unknown"


def get_health(server_name: Optional[str] = None) -> dict:
    """Return status, start time (ISO 8601 UTC), whole seconds of uptime,
    the release from the VERSION file and the configured server name."""
    return {
        "status": "ok",
        "start_time": datetime.fromtimestamp(_START_TIME, tz=timezone.utc).isoformat(),
        "uptime_seconds": int(time.time() - _START_TIME),
        "version": _version(),
        "server_name": server_name,
    }
