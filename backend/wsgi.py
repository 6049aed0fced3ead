"""WSGI entry point for gunicorn (``gunicorn -c gunicorn.conf.py``)."""

from vidshare import create_app

app = create_app()
