import os
import signal
import sys
import traceback
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from todoapp.core.config import load_settings

# Load .env before reading PORT/HOST/ENVIRONMENT
env_path = Path(__file__).resolve().parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def _unhandled_exception(exc_type, exc_value, exc_tb):
    """Print unhandled exceptions so process supervisors show the cause."""
    if exc_type is KeyboardInterrupt:
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    msg = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print("Unhandled exception (process will exit):\n" + msg, file=sys.stderr, flush=True)
    sys.__excepthook__(exc_type, exc_value, exc_tb)


def main() -> None:
    """Start the todo API server."""
    root_dir = os.path.dirname(os.path.abspath(__file__))
    sys.excepthook = _unhandled_exception

    settings = load_settings()
    port = settings.server.port
    host = settings.server.host
    environment = settings.app.environment.lower()
    reload = environment == "development"

    print(f"Starting todo API from {root_dir}...")
    print(f"Environment: {environment}")
    print(f"API available at http://{host}:{port}")
    print("Press CTRL+C to stop the server")

    def signal_handler(sig, frame):
        print("\n\nShutdown signal received. Stopping server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, signal_handler)

    try:
        # Single worker: the JSON store is not safe across processes
        uvicorn.run(
            "web.main:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level="info" if environment == "production" else "debug",
        )
    except KeyboardInterrupt:
        print("\n\nShutdown complete.")
        sys.exit(0)
    except Exception as e:
        print(f"\nFatal error: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
