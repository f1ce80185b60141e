from relay.utils.exceptions import RelayError, TransportError
from relay.utils.http import HttpClient, HttpResponse

__all__ = ["HttpClient", "HttpResponse", "RelayError", "TransportError"]
