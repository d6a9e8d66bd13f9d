"""Run FastAPI backend server."""

import os
import sys
from pathlib import Path

import uvicorn

sys.path.insert(0, str(Path(__file__).parent.parent))

from pqa.config import get_settings  # noqa: E402

if __name__ == "__main__":
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=os.environ.get("PQA_ENV", "development") == "development",
    )
