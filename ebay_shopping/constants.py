"""
Constants — Fixed API values and the closed enumeration catalog.

Everything a caller may pass into a builder method as a "choice" lives here as a
str-valued Enum. Builders coerce their argument through the Enum constructor, so
an out-of-set raw string raises ValueError instead of reaching the wire, while a
valid raw string (e.g. "77" for SiteID.DE) is still accepted.

Free-form identifiers (CategoryID, ItemID, UserID, ...) are plain strings and are
not validated.

Catalog contents:
  Operation            The eight Shopping API call names
  SiteID               Regional marketplaces (X-EBAY-API-SITE-ID header)
  ProductIDCodeType    Type attribute of a FindProducts ProductID
  ProductSort          FindProducts sort key
  SortOrder            Ascending / Descending
  CategoryInfoSelector IncludeSelector values for GetCategoryInfo
  ItemSelector         IncludeSelector values for GetSingleItem / GetMultipleItems
  UserProfileSelector  IncludeSelector values for GetUserProfile
  AckCode              Envelope acknowledgement values (response side)
  SeverityCode         Error severity values (response side)
"""

from enum import Enum


SHOPPING_API_VERSION = "1199"
REQUEST_DATA_FORMAT = "XML"
RESPONSE_DATA_FORMAT = "XML"
DEFAULT_ITEMS_PER_PAGE = 100

ENDPOINT_PRODUCTION = "https://open.api.ebay.com/shopping"
ENDPOINT_SANDBOX = "https://open.api.sandbox.ebay.com/shopping"

XML_NAMESPACE = "urn:ebay:apis:eBLBaseComponents"

# Paging bounds shared by PageNumber and MaxEntries
MIN_PAGE_VALUE = 1
MAX_PAGE_VALUE = 10000

# GetItemStatus / GetMultipleItems accept at most this many ItemID values
MAX_ITEM_IDS = 20

HEADER_API_VERSION = "X-EBAY-API-VERSION"
HEADER_IAF_TOKEN = "X-EBAY-API-IAF-TOKEN"
HEADER_REQUEST_ENCODING = "X-EBAY-API-REQUEST-ENCODING"
HEADER_RESPONSE_ENCODING = "X-EBAY-API-RESPONSE-ENCODING"
HEADER_SITE_ID = "X-EBAY-API-SITE-ID"
HEADER_CALL_NAME = "X-EBAY-API-CALL-NAME"


class Operation(str, Enum):
    FIND_PRODUCTS = "FindProducts"
    GET_CATEGORY_INFO = "GetCategoryInfo"
    GET_EBAY_TIME = "GeteBayTime"
    GET_ITEM_STATUS = "GetItemStatus"
    GET_MULTIPLE_ITEMS = "GetMultipleItems"
    GET_SHIPPING_COSTS = "GetShippingCosts"
    GET_SINGLE_ITEM = "GetSingleItem"
    GET_USER_PROFILE = "GetUserProfile"

    @property
    def request_root(self) -> str:
        """Root element name of the request document, e.g. "FindProductsRequest"."""
        return f"{self.value}Request"

    @property
    def response_root(self) -> str:
        """Root element name of the response document, e.g. "FindProductsResponse"."""
        return f"{self.value}Response"


class SiteID(str, Enum):
    US = "0"
    ENCA = "2"
    GB = "3"
    AU = "15"
    AT = "16"
    FRBE = "23"
    FR = "71"
    DE = "77"
    MOTOR = "100"
    IT = "101"
    NLBE = "123"
    NL = "146"
    ES = "186"
    CH = "193"
    HK = "201"
    IN = "203"
    IE = "205"
    MY = "207"
    FRCA = "210"
    PH = "211"
    PL = "212"
    RU = "215"
    SG = "216"


class ProductIDCodeType(str, Enum):
    """Type of product identifier passed in a FindProducts ProductID.

    EAN        International/European Article Number (8 or 13 digits)
    ISBN       International Standard Book Number (10 or 13 characters)
    MPN        Manufacturer Part Number (eBay enforces 65 characters max)
    Reference  eBay Catalog product ID (ePID)
    UPC        Universal Product Code (12 digits, mostly US and Canada)
    """

    EAN = "EAN"
    ISBN = "ISBN"
    MPN = "MPN"
    REFERENCE = "Reference"
    UPC = "UPC"


class ProductSort(str, Enum):
    ITEM_COUNT = "ItemCount"
    POPULARITY = "Popularity"
    RATING = "Rating"
    REVIEW_COUNT = "ReviewCount"
    TITLE = "Title"


class SortOrder(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"


class CategoryInfoSelector(str, Enum):
    CHILD_CATEGORIES = "ChildCategories"


class ItemSelector(str, Enum):
    """IncludeSelector values shared by GetSingleItem and GetMultipleItems."""

    COMPATIBILITY = "Compatibility"
    DESCRIPTION = "Description"
    DETAILS = "Details"
    ITEM_SPECIFICS = "ItemSpecifics"
    SHIPPING_COSTS = "ShippingCosts"
    TEXT_DESCRIPTION = "TextDescription"
    VARIATIONS = "Variations"


class UserProfileSelector(str, Enum):
    DETAILS = "Details"
    FEEDBACK_DETAILS = "FeedbackDetails"
    FEEDBACK_HISTORY = "FeedbackHistory"


class AckCode(str, Enum):
    SUCCESS = "Success"
    WARNING = "Warning"
    FAILURE = "Failure"
    PARTIAL_FAILURE = "PartialFailure"


class SeverityCode(str, Enum):
    ERROR = "Error"
    WARNING = "Warning"
