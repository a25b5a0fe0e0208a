# Gunicorn configuration file for whome
# https://docs.gunicorn.org/en/stable/settings.html
# Run with: gunicorn -c deploy/gunicorn.conf.py whome.wsgi:application

import multiprocessing
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "127.0.0.1:8000")
backlog = 512

# Worker processes
# Requests are short DB round trips (profile render, click count, redirect),
# so a small sync pool per core is enough.
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() + 1))
worker_class = "sync"
max_requests = 2000
max_requests_jitter = 100
timeout = int(os.getenv("GUNICORN_TIMEOUT", 20))
graceful_timeout = 10
keepalive = 2

# Process naming
proc_name = "whome"

# Server mechanics
daemon = False
pidfile = os.getenv("GUNICORN_PIDFILE") or None
# Avatar uploads are capped at 2 MB; spool them to the default temp dir
tmp_upload_dir = None

# Logging goes to stdout/stderr, next to Django's console LOGGING handler
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("LOG_LEVEL", "info").lower()
# Host is logged because custom domains route to different tenants
access_log_format = '%(h)s %(t)s "%({host}i)s" "%(r)s" %(s)s %(b)s "%(a)s" %(D)s'

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190
