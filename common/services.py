import logging

import requests
from django.conf import settings
from pybreaker import CircuitBreaker, CircuitBreakerError

logger = logging.getLogger(__name__)

# One breaker per outbound service so a failing push provider cannot trip
# calls to unrelated APIs.
circuit_breakers = {}


def get_circuit_breaker(service_name):
    if service_name not in circuit_breakers:
        circuit_breakers[service_name] = CircuitBreaker(
            fail_max=settings.EXTERNAL_HTTP_FAILURE_THRESHOLD,
            reset_timeout=settings.EXTERNAL_HTTP_RESET_TIMEOUT,
            name=service_name,
        )
    return circuit_breakers[service_name]


class HttpClient:
    """
    Thin wrapper around ``requests`` that applies the configured timeout and
    routes every call through the service's circuit breaker.
    """

    def __init__(self, service_name="default"):
        self.service_name = service_name
        self.breaker = get_circuit_breaker(service_name)

    @staticmethod
    def _get_timeout():
        return settings.EXTERNAL_HTTP_TIMEOUT_SECONDS

    @staticmethod
    def _send(method, url, **kwargs):
        response = requests.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    def request(self, method, url, **kwargs):
        kwargs.setdefault("timeout", self._get_timeout())
        try:
            return self.breaker.call(self._send, method, url, **kwargs)
        except CircuitBreakerError:
            logger.error(f"Circuit '{self.service_name}' open for {method} {url}")
            raise
        except requests.RequestException as e:
            logger.error(f"HTTP {method} {url} failed: {e}")
            raise

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)
