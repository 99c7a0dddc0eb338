"""Breadcrumb Trail dev launcher. Starts the API server in watch mode, or
prints a single generated journey with --generate."""

import argparse
import json
import logging
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "13013")


def main():
    parser = argparse.ArgumentParser(description="Breadcrumb Trail dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--demo", action="store_true",
                        help="Reset content to the demo world")
    parser.add_argument("--generate", action="store_true",
                        help="Print one generated journey as JSON and exit")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed override for --generate")
    parser.add_argument("--verbose", action="store_true",
                        help="Log every generated step")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.demo or args.data_dir or args.generate:
        from breadcrumb_trail import storage
        data_dir = args.data_dir or Path(os.getenv("DATA_DIR", "data"))
        storage.init_storage(data_dir)
        if args.demo:
            storage.reset_content()

    if args.generate:
        from breadcrumb_trail.service import generate_run
        bundle = generate_run({"seed": args.seed})
        print(json.dumps(bundle, indent=2))
        return

    # Build env for the server process so it picks up the same data dir
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())

    print(f"Starting API on http://localhost:{PORT} ...")
    proc = subprocess.Popen(
        ["uv", "run", "uvicorn", "breadcrumb_trail.app:app", "--reload", "--host", HOST, "--port", PORT],
        cwd=ROOT, env=env,
    )

    def shutdown(*_):
        print("\nShutting down...")
        proc.terminate()
        proc.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)
    proc.wait()


if __name__ == "__main__":
    main()
