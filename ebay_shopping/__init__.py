"""
ebay-shopping-client — Python binding for the eBay Shopping API (XML over HTTP).

This package provides request builders, XML (de)serialization and typed
response models for the eight Shopping API calls:

  service.py          ShoppingService: configuration and request factories.
  calls.py            Per-operation request builders with chainable setters.
  call_base.py        Shared serialization / execution logic for builders.
  models.py           Response envelope and nested value objects.
  response_parser.py  XML response -> model mapping.
  shopping_client.py  HTTP transport (requests) with the Shopping API headers.
  settings.py         ServiceConfig, DEFAULT_SETTINGS and .env loading.
  constants.py        API constants and enumerations.
  errors.py           SerializationFailed / TransportFailed / RemoteCallFailed.

Install with: pip install -e . (from the repository root)
"""

__version__ = "0.1.0"

from .constants import (
    ENDPOINT_PRODUCTION,
    ENDPOINT_SANDBOX,
    SHOPPING_API_VERSION,
    AckCode,
    CategoryInfoSelector,
    ItemSelector,
    Operation,
    ProductIDCodeType,
    ProductSort,
    SeverityCode,
    SiteID,
    SortOrder,
    UserProfileSelector,
)
from .errors import (
    RemoteCallFailed,
    SerializationFailed,
    ShoppingAPIError,
    TransportFailed,
)
from .settings import DEFAULT_SETTINGS, ServiceConfig, load_config
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
from .response_parser import ResponseParser
from .service import ShoppingService
