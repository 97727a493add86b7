"""
Calls — One request builder per Shopping API operation.

Builders are created by ShoppingService factory methods, populated through
chainable with_*() setters and sent with execute():

    response = (
        service.new_find_products_request()
        .with_query_keywords("Harry Potter")
        .with_max_entries(2)
        .execute()
    )

Setter policies:
  - PageNumber / MaxEntries are clamped into [1, 10000]; they never fail.
  - IncludeSelector values and repeated ItemIDs are ordered sets: adding a
    value twice stores it once, first-seen order is kept on the wire.
  - ItemID lists are capped at 20 values (extra values are dropped with a warning).
  - Choice-typed setters go through the matching Enum, so an out-of-catalog
    string raises ValueError. Free-form strings are not validated.
  - Single-value setters are last-write-wins.
"""

from .call_base import (
    BOOL,
    INT,
    NAME_VALUE_LISTS,
    PRODUCT_ID,
    REPEATED,
    SELECTORS,
    CallField,
    ShoppingCall,
    clamp_page_value,
)
from .constants import (
    MAX_ITEM_IDS,
    CategoryInfoSelector,
    ItemSelector,
    Operation,
    ProductSort,
    SortOrder,
    UserProfileSelector,
)
from .models import NameValueList, ProductID


class FindProductsRequest(ShoppingCall):
    """Search the eBay catalog for products by keywords, category or product identifier."""

    OPERATION = Operation.FIND_PRODUCTS
    FIELDS = (
        CallField("AvailableItemsOnly", "available_items_only", BOOL),
        CallField("CategoryID", "category_id"),
        CallField("DomainName", "domain_names", REPEATED),
        CallField("MaxEntries", "max_entries", INT),
        CallField("PageNumber", "page_number", INT),
        CallField("ProductID", "product_id", PRODUCT_ID),
        CallField("ProductSort", "product_sort"),
        CallField("QueryKeywords", "query_keywords"),
        CallField("SortOrder", "sort_order"),
    )

    def with_available_items_only(self, available_only: bool = True):
        """Only return products that have active listings."""
        self.available_items_only = bool(available_only)
        return self

    def with_category_id(self, category_id: str):
        """Restrict results to catalog products of one category, usually with keywords."""
        self.category_id = category_id
        return self

    def with_domain_name(self, *domain_names: str):
        """Filter by one or more product domains. Repeated values are stored once."""
        for name in domain_names:
            self.domain_names.add(name)
        return self

    def with_page_number(self, page: int):
        """Page of results to retrieve, clamped into [1, 10000].

        Check MoreResults / ApproximatePages in the response to know how many
        pages exist. The server defaults to the first page.
        """
        self.page_number = clamp_page_value(page)
        return self

    def with_max_entries(self, limit: int):
        """Maximum number of products per page, clamped into [1, 10000].

        The server returns a single product when this is omitted.
        """
        self.max_entries = clamp_page_value(limit)
        return self

    def with_product_id(self, code_type, product_id: str):
        """Find catalog products by ePID or GTIN (UPC, ISBN, EAN, MPN).

        Args:
            code_type: A ProductIDCodeType (or its string value).
            product_id: The identifier value.
        """
        self.product_id = ProductID.of(code_type, product_id)
        return self

    def with_product_sort(self, sort_by):
        """Sort key for the returned products; the server defaults to Popularity."""
        self.product_sort = ProductSort(sort_by).value
        return self

    def with_query_keywords(self, query: str):
        """Keyword query matched against product titles, descriptions and specifics.

        The server requires at least three alphanumeric characters and accepts up
        to 350. Prefer with_product_id() when a UPC/EAN/ISBN is known.
        """
        self.query_keywords = query
        return self

    def with_sort_order(self, order):
        """Ascending or Descending, applied to the ProductSort key."""
        self.sort_order = SortOrder(order).value
        return self


class GetCategoryInfoRequest(ShoppingCall):
    """Retrieve name, path and level data for one category (and optionally its children).

    Pass CategoryID "-1" with the ChildCategories selector to list all
    top-level categories of a site.
    """

    OPERATION = Operation.GET_CATEGORY_INFO
    FIELDS = (
        CallField("CategoryID", "category_id"),
        CallField("IncludeSelector", "include_selector", SELECTORS),
    )

    def with_category_id(self, category_id: str):
        self.category_id = category_id
        return self

    def with_include_selector(self, *selectors):
        """Add CategoryInfoSelector values (ChildCategories returns one level down)."""
        for selector in selectors:
            self.include_selector.add(CategoryInfoSelector(selector).value)
        return self


class GeteBayTimeRequest(ShoppingCall):
    """Retrieve the official eBay system time (GMT); useful as a connectivity check."""

    OPERATION = Operation.GET_EBAY_TIME


class GetItemStatusRequest(ShoppingCall):
    """Retrieve price and status data for up to 20 listings."""

    OPERATION = Operation.GET_ITEM_STATUS
    FIELDS = (
        CallField("ItemID", "item_ids", REPEATED),
    )

    def with_item_ids(self, *item_ids: str):
        """Add listing ids. Duplicates are stored once; more than 20 are dropped."""
        self._add_limited(self.item_ids, item_ids, MAX_ITEM_IDS, "ItemID")
        return self


class GetMultipleItemsRequest(ShoppingCall):
    """Retrieve public listing data for up to 20 listings in one call."""

    OPERATION = Operation.GET_MULTIPLE_ITEMS
    FIELDS = (
        CallField("IncludeSelector", "include_selector", SELECTORS),
        CallField("ItemID", "item_ids", REPEATED),
    )

    def with_item_ids(self, *item_ids: str):
        """Add listing ids. Duplicates are stored once; more than 20 are dropped."""
        self._add_limited(self.item_ids, item_ids, MAX_ITEM_IDS, "ItemID")
        return self

    def with_include_selector(self, *selectors):
        """Add ItemSelector values controlling which optional item data is returned."""
        for selector in selectors:
            self.include_selector.add(ItemSelector(selector).value)
        return self


class GetShippingCostsRequest(ShoppingCall):
    """Estimate shipping costs of a listing to a destination."""

    OPERATION = Operation.GET_SHIPPING_COSTS
    FIELDS = (
        CallField("DestinationCountryCode", "destination_country_code"),
        CallField("DestinationPostalCode", "destination_postal_code"),
        CallField("IncludeDetails", "include_details", BOOL),
        CallField("ItemID", "item_id", required=True),
        CallField("QuantitySold", "quantity_sold", INT),
    )

    def with_item_id(self, item_id: str):
        self.item_id = item_id
        return self

    def with_destination_country_code(self, country_code: str):
        """Two-letter ISO 3166 country of the buyer. Not validated locally."""
        self.destination_country_code = country_code
        return self

    def with_destination_postal_code(self, postal_code: str):
        self.destination_postal_code = postal_code
        return self

    def with_include_details(self, include: bool = True):
        """Also return the full ShippingDetails container."""
        self.include_details = bool(include)
        return self

    def with_quantity_sold(self, quantity: int):
        """Number of items the buyer intends to purchase."""
        self.quantity_sold = int(quantity)
        return self


class GetSingleItemRequest(ShoppingCall):
    """Retrieve public data for one listing.

    ItemID is mandatory on the wire and is always emitted, empty if unset.
    """

    OPERATION = Operation.GET_SINGLE_ITEM
    FIELDS = (
        CallField("IncludeSelector", "include_selector", SELECTORS),
        CallField("ItemID", "item_id", required=True),
        CallField("VariationSKU", "variation_sku"),
        CallField("VariationSpecifics", "variation_specifics", NAME_VALUE_LISTS),
    )

    def with_item_id(self, item_id: str):
        self.item_id = item_id
        return self

    def with_include_selector(self, *selectors):
        """Add ItemSelector values controlling which optional item data is returned."""
        for selector in selectors:
            self.include_selector.add(ItemSelector(selector).value)
        return self

    def with_variation_sku(self, sku: str):
        """Narrow a multi-variation listing down to the variation with this SKU."""
        self.variation_sku = sku
        return self

    def with_variation_specifics(self, name: str, *values: str):
        """Append a (name, values) pair identifying a variation.

        May be called repeatedly, e.g. once for "Color" and once for "Size".
        """
        self.variation_specifics.append(NameValueList(name=name, values=list(values)))
        return self


class GetUserProfileRequest(ShoppingCall):
    """Retrieve a user's public profile and feedback data."""

    OPERATION = Operation.GET_USER_PROFILE
    FIELDS = (
        CallField("IncludeSelector", "include_selector", SELECTORS),
        CallField("UserID", "user_id"),
    )

    def with_user_id(self, user_id: str):
        self.user_id = user_id
        return self

    def with_include_selector(self, *selectors):
        """Add UserProfileSelector values (Details, FeedbackDetails, FeedbackHistory)."""
        for selector in selectors:
            self.include_selector.add(UserProfileSelector(selector).value)
        return self


ALL_CALLS = (
    FindProductsRequest,
    GetCategoryInfoRequest,
    GeteBayTimeRequest,
    GetItemStatusRequest,
    GetMultipleItemsRequest,
    GetShippingCostsRequest,
    GetSingleItemRequest,
    GetUserProfileRequest,
)
