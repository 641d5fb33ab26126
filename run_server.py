#!/usr/bin/env python
"""
Server Entry Point

Usage:
    Development:  python run_server.py --dev
    Production:   python run_server.py
    
    Or with Gunicorn:
    gunicorn dashboard.main:app -c gunicorn.conf.py
"""

import argparse
import os
import subprocess


def run_dev_server():
    """Run development server with auto-reload."""
    import uvicorn
    
    uvicorn.run(
        "dashboard.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=True,
        reload_dirs=["dashboard"],
        log_level="debug",
    )


def run_prod_server():
    """Run production server with Uvicorn directly."""
    import uvicorn
    
    uvicorn.run(
        "dashboard.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        workers=int(os.getenv("WORKERS", 4)),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
        proxy_headers=True,
        forwarded_allow_ips="*",
        server_header=False,
    )


def run_gunicorn():
    """Run with Gunicorn."""
    subprocess.run(["gunicorn", "dashboard.main:app", "-c", "gunicorn.conf.py"], check=True)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Billing Dashboard API Server")
    parser.add_argument("--dev", action="store_true", help="Run in development mode with auto-reload")
    parser.add_argument("--gunicorn", action="store_true", help="Run with Gunicorn")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on (default: 8000)")
    
    args = parser.parse_args()
    os.environ["PORT"] = str(args.port)
    
    if args.dev:
        run_dev_server()
    elif args.gunicorn:
        run_gunicorn()
    else:
        run_prod_server()
