#!/usr/bin/env python3
"""Run the vocanova API server."""

import os

import uvicorn


def main():
    host = os.environ.get('VOCANOVA_HOST', '0.0.0.0')
    port = int(os.environ.get('VOCANOVA_PORT', '8000'))
    # Auto-reload is for local development only
    reload = os.environ.get('VOCANOVA_RELOAD', '0') == '1'

    print(f"Starting Vocanova API server on {host}:{port}...")
    print(f"API documentation available at: http://localhost:{port}/docs")
    uvicorn.run(
        "server.app:app",
        host=host,
        port=port,
        reload=reload
    )


if __name__ == "__main__":
    main()
