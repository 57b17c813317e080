#!/usr/bin/env python3
"""
API server entrypoint.
"""

import os
import sys
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def main():
    import uvicorn
    from shelfsense.api.main import app, get_category_service
    from shelfsense.core.errors import ConfigError, EncoderUnavailable
    from shelfsense.util.logging import logger

    # Load the catalog and the model up front instead of on the first request
    try:
        service = get_category_service()
    except ConfigError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    try:
        service.embed_text("warmup")
    except EncoderUnavailable as e:
        logger.log_encoder_failure("warmup", e)

    host = os.getenv("API_HOST", "127.0.0.1")
    port = int(os.getenv("API_PORT", "3001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
