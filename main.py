"""
College Hockey Simulator - Main Entry Point
Starts the FastAPI match service under uvicorn; there is no separate UI process.

Host and port come from RINK_API_HOST / RINK_API_PORT (default 0.0.0.0:8000).
"""

import subprocess
import sys
import os
import signal


def main():
    os.chdir(os.path.dirname(os.path.abspath(__file__)))
    host = os.environ.get("RINK_API_HOST", "0.0.0.0")
    port = os.environ.get("RINK_API_PORT", "8000")

    print(f"Match API on http://{host}:{port} (docs at /docs)")
    api_proc = subprocess.Popen([
        sys.executable, "-m", "uvicorn", "api.main:app",
        f"--host={host}", f"--port={port}",
        "--log-level=warning",
    ])

    def stop_api(signum, frame):
        api_proc.terminate()
        sys.exit(0)

    signal.signal(signal.SIGTERM, stop_api)
    signal.signal(signal.SIGINT, stop_api)

    try:
        api_proc.wait()
    except KeyboardInterrupt:
        pass
    finally:
        # The API server is the only child process
        api_proc.terminate()


if __name__ == "__main__":
    main()
