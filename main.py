import os

import uvicorn

from crackit.app import app


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("CRACKIT_HOST", "127.0.0.1"),
        port=int(os.environ.get("CRACKIT_PORT", "8000")),
    )
