# gunicorn.conf.py
# Start with: gunicorn app:app
import os

bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))

# Import app.py once in the master so a missing MONGO_URI or an unreachable
# database stops the server with exit status 1 instead of crash-looping workers
preload_app = True
