"""
Gunicorn Configuration

Uvicorn workers under Gunicorn for production deployment.
"""

import multiprocessing
import os

bind = os.getenv("BIND", f"0.0.0.0:{os.getenv('PORT', '8000')}")
workers = int(os.getenv("WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 60
keepalive = 5
graceful_timeout = 30

proc_name = "billing-dashboard-api"

errorlog = "-"
accesslog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
