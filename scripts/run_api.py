#!/usr/bin/env python3
"""
Starts the checkout API with uvicorn
"""
import os
import sys
from pathlib import Path

# project root on PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host=os.environ.get("CHECKOUT_API_HOST", "0.0.0.0"),
        port=int(os.environ.get("CHECKOUT_API_PORT", "8000")),
        reload=True,  # dev auto-reload
    )
