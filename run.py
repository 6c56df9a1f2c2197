#!/usr/bin/env python3
"""Run the API server."""

import uvicorn

from settings import HOST, PORT

if __name__ == "__main__":
    uvicorn.run("web.app:app", host=HOST, port=PORT, log_level="info")
