import httpx

from common.constants import MODEL_TIMEOUT_S


def get_client() -> httpx.AsyncClient:
    """
    One pooled client per process, shared by the model, lexicon and dictionary adapters.
    It holds no per-call state; each adapter passes its own headers and timeout.
    """
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(MODEL_TIMEOUT_S),
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )
    return client
