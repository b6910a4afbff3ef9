import os
import ssl
from typing import Any, Dict, Union

from .constants import ENV_DISABLE_SSL_VERIFY

_TRUTHY = ("1", "true", "yes", "on")


def default_verify() -> Union[ssl.SSLContext, bool]:
    """TLS verification for clients built by the library.

    The system trust store is used through truststore when it is installed,
    otherwise the certifi bundle (or ``SSL_CERT_FILE`` when set).
    """
    if os.environ.get(ENV_DISABLE_SSL_VERIFY, "").lower() in _TRUTHY:
        return False

    try:
        import truststore

        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    except ImportError:
        import certifi

        cafile = os.environ.get("SSL_CERT_FILE") or certifi.where()
        return ssl.create_default_context(cafile=os.path.expanduser(cafile))


def get_httpx_client_kwargs() -> Dict[str, Any]:
    """Keyword arguments for the httpx clients a GraphQLClient builds itself.

    Injected clients are used as given and never see these settings. Proxies
    come from the usual ``HTTP(S)_PROXY`` variables, which httpx reads itself.
    """
    return {"follow_redirects": True, "timeout": 30.0, "verify": default_verify()}
