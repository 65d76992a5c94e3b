import logging

import uvicorn
from studio.api.api_run import app
from studio.utilities.config import APP_HOST, APP_PORT, DEBUG


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO)
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Coach:     http://localhost:{APP_PORT}/")
    print(f"Ad studio: http://localhost:{APP_PORT}/ads")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
