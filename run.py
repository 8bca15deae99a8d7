#!/usr/bin/env python3
"""Run script for todaylist."""

import uvicorn

from todaylist.config import configure_logging

if __name__ == "__main__":
    configure_logging()
    uvicorn.run(
        "todaylist.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
