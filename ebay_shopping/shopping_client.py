"""
Shopping HTTP Client — Transport adapter for the eBay Shopping API.

This module is responsible for all HTTP communication with the Shopping API.
Every call is a single POST of an XML document to the configured endpoint,
with the call identified by headers rather than by URL:

    POST https://open.api.ebay.com/shopping
    X-EBAY-API-VERSION: 1199
    X-EBAY-API-IAF-TOKEN: <token>
    X-EBAY-API-REQUEST-ENCODING: XML
    X-EBAY-API-RESPONSE-ENCODING: XML
    X-EBAY-API-SITE-ID: 0
    X-EBAY-API-CALL-NAME: GetSingleItem

Outcomes of post():
  - status 200            -> raw response body (bytes) for the response parser
  - non-200 status        -> RemoteCallFailed(status_code, body)
  - requests exception    -> TransportFailed (DNS, connection refused, timeout, ...)

There is no retry, backoff or pooling policy beyond what requests.Session does
by default. Each request object gets its own client, so clients are never shared
between threads.
"""

import logging

import requests

from .constants import (
    HEADER_API_VERSION,
    HEADER_CALL_NAME,
    HEADER_IAF_TOKEN,
    HEADER_REQUEST_ENCODING,
    HEADER_RESPONSE_ENCODING,
    HEADER_SITE_ID,
    REQUEST_DATA_FORMAT,
    RESPONSE_DATA_FORMAT,
    Operation,
)
from .errors import RemoteCallFailed, TransportFailed
from .settings import ServiceConfig

logger = logging.getLogger(__name__)


class ShoppingHTTPClient:
    """HTTP client bound to one ServiceConfig snapshot and one operation.

    Manages a requests.Session carrying the fixed Shopping API headers. All
    calls for the owning request go through this single session.

    Attributes:
        config: The ServiceConfig snapshot the client was built from.
        operation: The Shopping API call this client issues.
    """

    def __init__(self, config: ServiceConfig, operation: Operation):
        """Initialize the client.

        Args:
            config: Endpoint, token, site id and timeout to use.
            operation: Call name sent in the X-EBAY-API-CALL-NAME header.
        """
        self.config = config
        self.operation = Operation(operation)
        self._session = requests.Session()
        self._session.headers.update(self.build_headers())

    def build_headers(self) -> dict:
        """Return the headers every Shopping API call for this operation needs."""
        return {
            HEADER_API_VERSION: self.config.version,
            HEADER_IAF_TOKEN: self.config.token,
            HEADER_REQUEST_ENCODING: REQUEST_DATA_FORMAT,
            HEADER_RESPONSE_ENCODING: RESPONSE_DATA_FORMAT,
            HEADER_SITE_ID: self.config.site_id.value,
            HEADER_CALL_NAME: self.operation.value,
            "Content-Type": "text/xml; charset=utf-8",
        }

    @property
    def headers(self) -> dict:
        return dict(self._session.headers)

    def post(self, url: str, body: bytes) -> bytes:
        """POST a serialized request body and return the raw response body.

        Args:
            url: Endpoint to call (normally config.endpoint).
            body: UTF-8 encoded XML request document.

        Returns:
            The response body bytes of a 200 response.

        Raises:
            TransportFailed: If the request could not be completed.
            RemoteCallFailed: If the server answered with a non-200 status.
        """
        logger.debug(
            "POST %s call=%s site=%s (%d bytes)",
            url, self.operation.value, self.config.site_id.value, len(body),
        )

        try:
            response = self._session.post(url, data=body, timeout=self.config.timeout)
        except requests.RequestException as e:
            logger.debug("%s transport error: %s", self.operation.value, e)
            raise TransportFailed(
                f"{self.operation.value} request to {url} failed: {e}",
                operation=self.operation.value,
                cause=e,
            ) from e

        if response.status_code != 200:
            logger.debug("%s returned HTTP %s", self.operation.value, response.status_code)
            raise RemoteCallFailed(
                response.status_code, response.text, operation=self.operation.value
            )

        return response.content

    def close(self):
        self._session.close()
