#!/usr/bin/env python3
"""
Run script for the Progress Report backend
"""
import uvicorn

from progress_report.config.settings import settings
from progress_report.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, reload=settings.debug)
