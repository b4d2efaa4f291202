"""Server entrypoint: runs uvicorn with host and port from the environment."""
import os
import uvicorn

# Import the app object directly so bundled builds do not depend on uvicorn's string import
from brokerage_assistant.main import app


def main() -> None:
    host = os.environ.get("BACKEND_HOST", "127.0.0.1")
    port = int(os.environ.get("BACKEND_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
