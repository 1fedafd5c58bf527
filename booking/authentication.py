"""
Session authentication for the API.

DRF's stock ``SessionAuthentication`` has no ``WWW-Authenticate``
challenge, which makes DRF downgrade "not authenticated" to 403.  The
hospital endpoints distinguish a missing session (401) from a hospital
mismatch (403), so this subclass supplies a challenge value.  Keeping it
in its own module also gives the settings a stable import path.
"""
from __future__ import annotations

from rest_framework import authentication


class SessionAuthentication(authentication.SessionAuthentication):
    """Cookie session authentication that answers 401 when absent."""

    keyword = 'Session'

    def authenticate_header(self, request):
        return self.keyword
