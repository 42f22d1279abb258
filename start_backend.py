#!/usr/bin/env python3
"""
Backend starter for local development.
Runs the EventHub API under uvicorn with auto-reload.
"""

import os
import uvicorn
from dotenv import load_dotenv

if __name__ == "__main__":
    script_dir = os.path.dirname(os.path.abspath(__file__))
    os.chdir(script_dir)
    load_dotenv()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))

    print(f"Starting EventHub API on http://localhost:{port} (docs at /docs)")

    uvicorn.run(
        "eventhub.main:app",
        host=host,
        port=port,
        reload=os.getenv("RELOAD", "true").lower() == "true",
        reload_dirs=["./eventhub"],
    )
