"""Run the API with uvicorn: ``python -m technotes [port]``."""
from __future__ import annotations

import sys

from uvicorn import run

from technotes.main import app

if __name__ == "__main__":
    port = int(sys.argv[1]) if len(sys.argv) > 1 else 3500
    run(app, host="0.0.0.0", port=port, log_level="info")
