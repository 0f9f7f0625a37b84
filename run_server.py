#!/usr/bin/env python3
"""
PR Change Filter Server

Runs the Flask API for pattern validation and pull request evaluation.
"""

from pr_change_filter.api import create_app
from pr_change_filter.config import get_config


if __name__ == '__main__':
    config = get_config()
    app = create_app(config)

    print("Starting PR Change Filter Server...")
    print(f"Server will be available at: http://{config.server.host}:{config.server.port}")
    print("API Documentation:")
    print("   - Health Check: GET /api/v1/health")
    print("   - Validate Patterns: POST /api/v1/filters/validate")
    print("   - Evaluate Pull Request: POST /api/v1/filters/evaluate")

    app.run(
        host=config.server.host,
        port=config.server.port,
        debug=config.debug
    )
