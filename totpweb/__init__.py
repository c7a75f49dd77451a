"""
totpweb package

Small JSON API (Flask) in front of totpcore. Stateless: the secret travels with
every request and is never stored.
"""

from .app import app

__all__ = ['app']
