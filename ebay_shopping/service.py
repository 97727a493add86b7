"""
Shopping Service — Long-lived entry point for building Shopping API requests.

The service holds a ServiceConfig (token, endpoint, site id, timeout) and hands
out one request builder per call. Each builder snapshots the config and gets
its own ShoppingHTTPClient, so a builder is never affected by later
reconfiguration and builders can be executed from different threads.

Reconfiguration (with_endpoint(), with_site_id(), ...) is not synchronized:
finish configuring the service before constructing requests concurrently.

Typical usage:
    service = ShoppingService("my-iaf-token").with_site_id(SiteID.GB)
    response = service.new_get_single_item_request().with_item_id("1234").execute()
    if response.ack != AckCode.SUCCESS:
        for error in response.errors:
            print(error.severity, error.short_message)
"""

import logging
from dataclasses import replace
from typing import Optional

from .calls import (
    FindProductsRequest,
    GetCategoryInfoRequest,
    GeteBayTimeRequest,
    GetItemStatusRequest,
    GetMultipleItemsRequest,
    GetShippingCostsRequest,
    GetSingleItemRequest,
    GetUserProfileRequest,
)
from .constants import ENDPOINT_PRODUCTION, SiteID
from .settings import ServiceConfig, load_config, resolve_endpoint
from .shopping_client import ShoppingHTTPClient

logger = logging.getLogger(__name__)


class ShoppingService:
    """Factory for per-operation Shopping API requests.

    Defaults: API version 1199, production endpoint, eBay US site (0),
    10 second timeout.

    Attributes:
        config: The current ServiceConfig. Replaced, never mutated, on reconfiguration.
    """

    def __init__(self, token: str = "", config: Optional[ServiceConfig] = None):
        """Initialize the service.

        Args:
            token: IAF token. Ignored when config is given.
            config: A complete ServiceConfig, e.g. from load_config().
        """
        self.config = config or ServiceConfig(token=token, endpoint=ENDPOINT_PRODUCTION)

    @classmethod
    def from_env(cls, env_file: Optional[str] = "./.env") -> "ShoppingService":
        """Build a service from a .env file and environment variables (see settings.py)."""
        return cls(config=load_config(env_file))

    # -----------------------------------------------------------------------
    # Reconfiguration
    # -----------------------------------------------------------------------

    def with_endpoint(self, endpoint: str) -> "ShoppingService":
        """Change the endpoint: "production", "sandbox" or any URL (e.g. a test server)."""
        self.config = replace(self.config, endpoint=resolve_endpoint(endpoint))
        return self

    def with_site_id(self, site_id) -> "ShoppingService":
        """Change the marketplace. Raises ValueError for ids outside SiteID."""
        self.config = replace(self.config, site_id=SiteID(site_id))
        return self

    def with_timeout(self, timeout: float) -> "ShoppingService":
        """Change the per-request timeout, in seconds."""
        self.config = replace(self.config, timeout=float(timeout))
        return self

    def with_token(self, token: str) -> "ShoppingService":
        self.config = replace(self.config, token=token)
        return self

    # -----------------------------------------------------------------------
    # Request factories
    # -----------------------------------------------------------------------

    def _build(self, call_class):
        client = ShoppingHTTPClient(self.config, call_class.OPERATION)
        logger.debug("New %s request for %r", call_class.OPERATION.value, self.config)
        return call_class(config=self.config, client=client)

    def new_find_products_request(self) -> FindProductsRequest:
        return self._build(FindProductsRequest)

    def new_get_category_info_request(self, category_id: Optional[str] = None) -> GetCategoryInfoRequest:
        """New GetCategoryInfo request, optionally pre-populated with a category id."""
        request = self._build(GetCategoryInfoRequest)
        if category_id is not None:
            request.with_category_id(category_id)
        return request

    def new_get_ebay_time_request(self) -> GeteBayTimeRequest:
        return self._build(GeteBayTimeRequest)

    def new_get_item_status_request(self) -> GetItemStatusRequest:
        return self._build(GetItemStatusRequest)

    def new_get_multiple_items_request(self) -> GetMultipleItemsRequest:
        return self._build(GetMultipleItemsRequest)

    def new_get_shipping_costs_request(self) -> GetShippingCostsRequest:
        return self._build(GetShippingCostsRequest)

    def new_get_single_item_request(self) -> GetSingleItemRequest:
        return self._build(GetSingleItemRequest)

    def new_get_user_profile_request(self) -> GetUserProfileRequest:
        return self._build(GetUserProfileRequest)
