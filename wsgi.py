"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 --threads 8 -b 0.0.0.0:8000 wsgi:app

Period locks are per process; run several workers only against PostgreSQL,
where row locks serialize draw transitions across processes.
"""

from dball import create_app

app = create_app()
