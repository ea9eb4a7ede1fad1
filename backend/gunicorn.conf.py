# Application
wsgi_app = "tokengate:create_app()"

# Bind & workers
bind = "0.0.0.0:8000"
workers = 2  # override with GUNICORN_WORKERS
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # override with LOG_LEVEL

# Trust proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
