# scripts/run_dashboard.py

import argparse
import sys
from pathlib import Path

import uvicorn

sys.path.append(str(Path(__file__).resolve().parents[1]))


def main():
    parser = argparse.ArgumentParser(description="CryptoStats Dashboard API")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on code changes (development only).",
    )
    args = parser.parse_args()

    # One worker only: watchlist and selection state live in this process
    uvicorn.run(
        "apps.dashboard_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
    )


if __name__ == "__main__":
    main()
