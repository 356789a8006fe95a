#!/usr/bin/env python3
"""
Standalone server script.
This script starts the FastAPI server with proper configuration.
"""
import sys
import os
import socket
import time
import traceback
from pathlib import Path

# Add the backend directory to the Python path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

# Set up environment
os.chdir(backend_dir)


def is_port_in_use(host, port):
    """Check if a port is already in use."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
            return False
        except OSError:
            return True


if __name__ == "__main__":
    import uvicorn
    from promo_engine.core.config import settings

    HOST = settings.HOST
    PORT = settings.PORT

    # Check if port is already in use; retry a few times (e.g. previous instance still shutting down)
    for attempt in range(3):
        if not is_port_in_use(HOST, PORT):
            break
        print(f"Port {PORT} is in use. Retrying in 3s ({attempt + 1}/3)...", file=sys.stderr)
        time.sleep(3)
    else:
        print(f"ERROR: Port {PORT} is still in use after retries. Another instance may be running.", file=sys.stderr)
        sys.exit(1)

    # Test import before starting server
    try:
        print("Testing app import...")
        from promo_engine.main import app  # noqa: F401
        print("App import successful!")
    except Exception as e:
        print(f"ERROR: Failed to import app: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)

    try:
        print("Starting uvicorn server...")
        uvicorn.run(
            "promo_engine.main:app",
            host=HOST,
            port=PORT,
            log_level="info",
            access_log=True,
            reload=False,
        )
    except OSError as e:
        print(f"ERROR: OS error starting server: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nServer stopped by user")
        sys.exit(0)
