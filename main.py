"""
Container entry point for the Keylight intake form.

Reads settings from the environment and listens on every interface at
$PORT, ignoring HOST.
"""

import uvicorn

from utils.config import Config
from web.app import create_app


if __name__ == "__main__":
    config = Config.load()
    print(f"Serving Keylight Intake on 0.0.0.0:{config.port}, backend {config.api_base_url}")

    uvicorn.run(create_app(config), host="0.0.0.0", port=config.port)
