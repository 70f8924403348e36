# Rurushi server client

from .api_client import ApiClient, get_api_client
from ..errors import RequestError

__all__ = ['ApiClient', 'get_api_client', 'RequestError']
