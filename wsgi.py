"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 2 --threads 4 -b 0.0.0.0:8000 wsgi:app
"""

from lottery_sales import create_app

app = create_app()
