"""Fractured dev launcher. Starts the backend in watch mode, or lints content."""

import argparse
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
LOG_LEVEL = os.getenv("LOG_LEVEL", "info")


def check_content(path: Path) -> int:
    """Print authoring problems in a content file. Returns the exit code."""
    from fractured.scenes import lint_scene_graph, load_scene_graph

    graph = load_scene_graph(path)
    problems = lint_scene_graph(graph)
    for line in problems:
        print(line)
    print(f"{len(graph.scenes)} scenes, {len(problems)} problem(s)")
    return 1 if problems else 0


def main():
    parser = argparse.ArgumentParser(description="Fractured dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--check", type=Path, nargs="?", const=ROOT / "presets" / "story.json",
                        default=None, metavar="STORY",
                        help="Lint a content file and exit (default: bundled story)")
    args = parser.parse_args()

    if args.check is not None:
        sys.exit(check_content(args.check))

    # Build env for the subprocess so the backend picks up the same data dir
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())

    print(f"Starting backend on http://localhost:{PORT} ...")
    proc = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "backend.app:app", "--reload",
         "--host", HOST, "--port", PORT, "--log-level", LOG_LEVEL],
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
