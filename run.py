#!/usr/bin/env python3
"""Run script for taskFit."""

import logging

import uvicorn

from taskfit.config import LOG_LEVEL

if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "taskfit.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
