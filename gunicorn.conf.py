import os

# Bind to the port provided via the PORT environment variable, defaulting to
# 5000.
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# Requests are short form posts and list renders, so plain sync workers
# suffice.  Workers share the list cache through CACHE_DIR or Redis; the
# activity logger batches per process.
workers = int(os.getenv("WEB_CONCURRENCY", "2"))
worker_class = "sync"
timeout = 30
