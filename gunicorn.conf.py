"""
Gunicorn configuration for Railway deployment.
"""
import os

# Bind to Railway's PORT or default
bind = f"0.0.0.0:{os.getenv('PORT', '3000')}"

# Worker configuration
# Each request may wait on Seal + Shopify; threads keep slow upstreams from blocking the worker
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'gthread'
threads = int(os.getenv('GUNICORN_THREADS', '4'))
# Outbound calls are capped by HTTP_TIMEOUT; leave room for a few in sequence
timeout = 60
keepalive = 5

# Logging
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = os.getenv('LOG_LEVEL', 'info')
capture_output = True

# Process naming
proc_name = 'seal-flow-proxy'

# Preload app so the region table is built once
preload_app = True

# Graceful restart
graceful_timeout = 30


def on_starting(server):
    print("[Gunicorn] Starting Seal Flow proxy...")


def on_exit(server):
    print("[Gunicorn] Seal Flow proxy shutting down...")
