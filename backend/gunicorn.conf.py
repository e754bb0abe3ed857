import multiprocessing
import os

bind = "0.0.0.0:8000"
wsgi_app = "config.wsgi:application"
workers = int(os.environ.get("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
accesslog = "-"
errorlog = "-"
worker_class = "gthread"
threads = int(os.environ.get("GUNICORN_THREADS", 4))
# Large spreadsheet validation runs inside the request; keep above IMPORT_PARSE_TIMEOUT_SECONDS.
timeout = int(os.environ.get("GUNICORN_TIMEOUT", 90))
