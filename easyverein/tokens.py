"""
Bearer token storage.

The client only ever talks to a TokenStore. Where a refreshed token ends up is
decided by the sink the store was built with: the stored APICredential row, or
the API_TOKEN line of the .env file.
"""
import logging
from pathlib import Path
from typing import Protocol

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from dotenv import set_key

logger = logging.getLogger(__name__)

PROVIDER = 'easyverein'


class TokenSink(Protocol):
    def replace(self, new_token: str) -> None:
        ...


class CredentialTokenSink:
    """Persists refreshed tokens to an APICredential row."""

    def __init__(self, credential):
        self.credential = credential

    def replace(self, new_token: str) -> None:
        self.credential.update_token(new_token)
        logger.info(f"Saved refreshed token to API credential '{self.credential.provider}'")


class EnvFileTokenSink:
    """Rewrites the API_TOKEN entry of a dotenv file."""

    def __init__(self, path, key: str = 'API_TOKEN'):
        self.path = Path(path)
        self.key = key

    def replace(self, new_token: str) -> None:
        set_key(str(self.path), self.key, new_token, quote_mode='never')
        logger.info(f"Saved refreshed token to {self.path}")


class TokenStore:
    """Holds the current bearer token and forwards replacements to a sink."""

    def __init__(self, token: str, sink: TokenSink = None):
        self._token = token
        self.sink = sink

    def get(self) -> str:
        return self._token

    def replace(self, new_token: str) -> None:
        self._token = new_token
        if self.sink is not None:
            self.sink.replace(new_token)


def build_token_store() -> TokenStore:
    """
    Build the token store for a sync run.

    A stored APICredential wins over the API_TOKEN setting; each keeps
    refreshed tokens where it found the original.
    """
    from easyverein.models import APICredential

    credential = APICredential.objects.filter(provider=PROVIDER).first()
    if credential and credential.api_token:
        return TokenStore(credential.api_token, CredentialTokenSink(credential))

    token = settings.EASYVEREIN_API_TOKEN
    if not token:
        raise ImproperlyConfigured(
            "easyVerein API token not found. Set API_TOKEN in the environment (or .env), "
            "or store one as an APICredential with provider 'easyverein'."
        )
    return TokenStore(token, EnvFileTokenSink(settings.ENV_FILE))
