#!/usr/bin/env python3
"""
Run the Keylight intake form web server.
"""

import uvicorn

from utils.config import Config


def main():
    """Start the web server."""
    config = Config.load()

    print(f"Starting Keylight Intake on http://{config.host}:{config.port}")
    print(f"Submissions will be posted to {config.api_base_url}")
    print("Press Ctrl+C to stop")

    uvicorn.run(
        "web.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
    )


if __name__ == "__main__":
    main()
