"""
Models — Typed structures mirroring the Shopping API XML schema.

All response models are passive dataclasses: they carry what the server sent
and nothing else. Missing elements keep their zero values ("" / 0 / False /
empty list / zero Price), and no model interprets the acknowledgement code or
the error list. Checking ``ack`` and ``errors`` is the caller's job.

Two value types are shared with the request side:
  ProductID      (type attribute + identifier), used by FindProducts
  NameValueList  (name + values), used for VariationSpecifics and ItemSpecifics

Response layout (one class per operation, all extending ResponseEnvelope):
  FindProductsResponse       products, domain histogram, paging counters
  GetCategoryInfoResponse    category array, version, update time
  GeteBayTimeResponse        envelope only (the timestamp is the payload)
  GetItemStatusResponse      status items
  GetMultipleItemsResponse   simple items
  GetShippingCostsResponse   cost summary, shipping details, in-store pickup
  GetSingleItemResponse      one simple item
  GetUserProfileResponse     user, feedback history, feedback details
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from .constants import ProductIDCodeType


# ---------------------------------------------------------------------------
# Shared value types
# ---------------------------------------------------------------------------

@dataclass
class ProductID:
    """A product identifier tagged with its code type (EAN, ISBN, MPN, Reference, UPC)."""
    code_type: str = ""
    value: str = ""

    @classmethod
    def of(cls, code_type, value: str) -> "ProductID":
        """Build a ProductID, rejecting code types outside ProductIDCodeType."""
        return cls(code_type=ProductIDCodeType(code_type).value, value=value)


@dataclass
class NameValueList:
    """One name with one or more values (item specifics, variation specifics)."""
    name: str = ""
    values: List[str] = field(default_factory=list)


@dataclass
class Price:
    """An amount in a currency, e.g. <CurrentPrice currencyID="USD">9.99</CurrentPrice>."""
    currency_id: str = ""
    value: Decimal = Decimal("0")


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------

@dataclass
class ErrorParameter:
    param_id: str = ""
    value: str = ""


@dataclass
class ErrorDetail:
    """A business-level error or warning returned inside the envelope.

    Presence of an ErrorDetail does not mean the call failed: warnings may be
    returned alongside a Success or Warning acknowledgement.
    """
    classification: str = ""
    code: str = ""
    parameters: List[ErrorParameter] = field(default_factory=list)
    long_message: str = ""
    severity: str = ""
    short_message: str = ""


@dataclass
class ResponseEnvelope:
    """Fields common to every Shopping API response.

    Attributes:
        ack: Success, Warning, Failure or PartialFailure (see constants.AckCode).
        build: Server build identifier.
        correlation_id: Echo of the request MessageID, empty if none was sent.
        errors: Business errors and warnings.
        timestamp: Server time the response was generated (ISO 8601, GMT).
        version: API version that handled the call.
    """
    ack: str = ""
    build: str = ""
    correlation_id: str = ""
    errors: List[ErrorDetail] = field(default_factory=list)
    timestamp: str = ""
    version: str = ""


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@dataclass
class BasicUser:
    feedback_private: bool = False
    feedback_rating_star: str = ""
    feedback_score: int = 0
    user_id: str = ""


@dataclass
class Seller:
    user_id: str = ""
    feedback_rating_star: str = ""
    feedback_score: int = 0
    positive_feedback_percent: float = 0.0
    top_rated_seller: bool = False


@dataclass
class SimpleUser:
    """Public profile data returned by GetUserProfile."""
    about_me_url: str = ""
    feedback_details_url: str = ""
    feedback_private: bool = False
    feedback_rating_star: str = ""
    feedback_score: int = 0
    my_world_url: str = ""
    new_user: bool = False
    positive_feedback_percent: float = 0.0
    registration_date: str = ""
    registration_site: str = ""
    seller_business_type: str = ""
    seller_items_url: str = ""
    status: str = ""
    store_name: str = ""
    store_url: str = ""
    top_rated_seller: bool = False
    user_anonymized: bool = False
    user_id: str = ""


@dataclass
class FeedbackPeriod:
    period_in_days: int = 0
    count: int = 0


@dataclass
class AverageRatingDetails:
    rating_detail: str = ""
    rating: float = 0.0
    rating_count: int = 0


@dataclass
class FeedbackHistory:
    average_rating_details: List[AverageRatingDetails] = field(default_factory=list)
    bid_retraction_feedback_periods: List[FeedbackPeriod] = field(default_factory=list)
    negative_feedback_periods: List[FeedbackPeriod] = field(default_factory=list)
    neutral_feedback_periods: List[FeedbackPeriod] = field(default_factory=list)
    positive_feedback_periods: List[FeedbackPeriod] = field(default_factory=list)
    total_feedback_periods: List[FeedbackPeriod] = field(default_factory=list)
    unique_negative_feedback_count: int = 0
    unique_neutral_feedback_count: int = 0
    unique_positive_feedback_count: int = 0


@dataclass
class FeedbackDetail:
    comment_text: str = ""
    comment_time: str = ""
    comment_type: str = ""
    commenting_user: str = ""
    commenting_user_score: int = 0
    feedback_id: str = ""
    feedback_rating_star: str = ""
    item_id: str = ""
    item_price: Price = field(default_factory=Price)
    item_title: str = ""
    role: str = ""
    transaction_id: str = ""


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass
class Product:
    """An eBay catalog product matched by FindProducts."""
    details_url: str = ""
    display_stock_photos: bool = False
    domain_name: str = ""
    item_specifics: List[NameValueList] = field(default_factory=list)
    product_ids: List[ProductID] = field(default_factory=list)
    product_state: str = ""
    review_count: int = 0
    stock_photo_url: str = ""
    title: str = ""


@dataclass
class Domain:
    domain_name: str = ""
    count: int = 0


@dataclass
class Category:
    category_id: str = ""
    category_id_path: str = ""
    category_level: int = 0
    category_name: str = ""
    category_name_path: str = ""
    category_parent_id: str = ""
    leaf_category: bool = False


# ---------------------------------------------------------------------------
# Shipping
# ---------------------------------------------------------------------------

@dataclass
class PickUpInStoreDetails:
    available_for_pickup_in_store: bool = False
    eligible_for_pickup_in_store: bool = False


@dataclass
class ShippingCostSummary:
    """Lowest-priced shipping option to the requested destination."""
    import_charge: Price = field(default_factory=Price)
    insurance_cost: Price = field(default_factory=Price)
    insurance_option: str = ""
    listed_shipping_service_cost: Price = field(default_factory=Price)
    shipping_service_cost: Price = field(default_factory=Price)
    shipping_service_name: str = ""
    shipping_type: str = ""


@dataclass
class ShippingServiceOption:
    """A domestic shipping service available to the requested destination."""
    estimated_delivery_max_time: str = ""
    estimated_delivery_min_time: str = ""
    expedited_service: bool = False
    fast_and_free: bool = False
    logistic_plan_type: str = ""
    shipping_insurance_cost: Price = field(default_factory=Price)
    shipping_service_additional_cost: Price = field(default_factory=Price)
    shipping_service_cost: Price = field(default_factory=Price)
    shipping_service_cut_off_time: str = ""
    shipping_service_name: str = ""
    shipping_service_priority: int = 0
    shipping_surcharge: Price = field(default_factory=Price)
    shipping_time_max: int = 0
    shipping_time_min: int = 0
    ships_to: List[str] = field(default_factory=list)


@dataclass
class InternationalShippingServiceOption:
    estimated_delivery_max_time: str = ""
    estimated_delivery_min_time: str = ""
    import_charge: Price = field(default_factory=Price)
    shipping_service_additional_cost: Price = field(default_factory=Price)
    shipping_service_cost: Price = field(default_factory=Price)
    shipping_service_cut_off_time: str = ""
    shipping_service_name: str = ""
    shipping_service_priority: int = 0
    ships_to: List[str] = field(default_factory=list)


@dataclass
class SalesTax:
    sales_tax_amount: Price = field(default_factory=Price)
    sales_tax_percent: float = 0.0
    sales_tax_state: str = ""
    shipping_included_in_tax: bool = False


@dataclass
class TaxJurisdiction:
    jurisdiction_id: str = ""
    sales_tax_percent: float = 0.0
    shipping_included_in_tax: bool = False


@dataclass
class ShippingDetails:
    """Full shipping breakdown, only returned when IncludeDetails was true."""
    cod_cost: Price = field(default_factory=Price)
    exclude_ship_to_locations: List[str] = field(default_factory=list)
    insurance_cost: Price = field(default_factory=Price)
    insurance_option: str = ""
    international_insurance_cost: Price = field(default_factory=Price)
    international_insurance_option: str = ""
    international_shipping_service_options: List[InternationalShippingServiceOption] = field(
        default_factory=list
    )
    sales_tax: SalesTax = field(default_factory=SalesTax)
    shipping_rate_error_message: str = ""
    shipping_service_options: List[ShippingServiceOption] = field(default_factory=list)
    tax_jurisdictions: List[TaxJurisdiction] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

@dataclass
class StatusItem:
    """Listing status returned by GetItemStatus, one per requested ItemID."""
    bid_count: int = 0
    buy_it_now_available: bool = False
    converted_current_price: Price = field(default_factory=Price)
    end_time: str = ""
    high_bidder: BasicUser = field(default_factory=BasicUser)
    item_id: str = ""
    listing_status: str = ""
    listing_type: str = ""
    reserve_met: bool = False
    time_left: str = ""


@dataclass
class Address:
    city_name: str = ""
    company_name: str = ""
    country_name: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    postal_code: str = ""
    state_or_province: str = ""
    street1: str = ""
    street2: str = ""


@dataclass
class BusinessSellerDetails:
    additional_contact_information: str = ""
    address: Address = field(default_factory=Address)
    email: str = ""
    fax: str = ""
    legal_invoice: bool = False
    trade_registration_number: str = ""


@dataclass
class ReturnPolicy:
    description: str = ""
    refund: str = ""
    returns_accepted: str = ""
    returns_within: str = ""
    shipping_cost_paid_by: str = ""


@dataclass
class Storefront:
    store_name: str = ""
    store_url: str = ""


@dataclass
class Variation:
    quantity: int = 0
    quantity_sold: int = 0
    sku: str = ""
    start_price: Price = field(default_factory=Price)
    variation_specifics: List[NameValueList] = field(default_factory=list)


@dataclass
class Variations:
    variations: List[Variation] = field(default_factory=list)
    variation_specifics_set: List[NameValueList] = field(default_factory=list)


@dataclass
class SimpleItem:
    """A listing as returned by GetSingleItem and GetMultipleItems.

    Which fields are populated depends on the IncludeSelector values sent.
    """
    auto_pay: bool = False
    best_offer_enabled: bool = False
    bid_count: int = 0
    business_seller_details: BusinessSellerDetails = field(default_factory=BusinessSellerDetails)
    buy_it_now_available: bool = False
    buy_it_now_price: Price = field(default_factory=Price)
    condition_description: str = ""
    condition_display_name: str = ""
    condition_id: int = 0
    converted_buy_it_now_price: Price = field(default_factory=Price)
    converted_current_price: Price = field(default_factory=Price)
    country: str = ""
    current_price: Price = field(default_factory=Price)
    description: str = ""
    end_time: str = ""
    gallery_url: str = ""
    handling_time: int = 0
    high_bidder: BasicUser = field(default_factory=BasicUser)
    hit_count: int = 0
    item_id: str = ""
    item_specifics: List[NameValueList] = field(default_factory=list)
    listing_status: str = ""
    listing_type: str = ""
    location: str = ""
    minimum_to_bid: Price = field(default_factory=Price)
    picture_urls: List[str] = field(default_factory=list)
    postal_code: str = ""
    primary_category_id: str = ""
    primary_category_id_path: str = ""
    primary_category_name: str = ""
    quantity: int = 0
    quantity_sold: int = 0
    reserve_met: bool = False
    return_policy: ReturnPolicy = field(default_factory=ReturnPolicy)
    seller: Seller = field(default_factory=Seller)
    shipping_cost_summary: ShippingCostSummary = field(default_factory=ShippingCostSummary)
    ship_to_locations: List[str] = field(default_factory=list)
    site: str = ""
    sku: str = ""
    start_time: str = ""
    storefront: Storefront = field(default_factory=Storefront)
    subtitle: str = ""
    time_left: str = ""
    title: str = ""
    top_rated_listing: bool = False
    variations: Variations = field(default_factory=Variations)
    view_item_url_for_natural_search: str = ""
    watch_count: int = 0


# ---------------------------------------------------------------------------
# Per-operation responses
# ---------------------------------------------------------------------------

@dataclass
class FindProductsResponse(ResponseEnvelope):
    approximate_pages: int = 0
    domain_histogram: List[Domain] = field(default_factory=list)
    more_results: bool = False
    page_number: int = 0
    products: List[Product] = field(default_factory=list)
    total_products: int = 0


@dataclass
class GetCategoryInfoResponse(ResponseEnvelope):
    categories: List[Category] = field(default_factory=list)
    category_count: int = 0
    category_version: str = ""
    update_time: str = ""


@dataclass
class GeteBayTimeResponse(ResponseEnvelope):
    pass


@dataclass
class GetItemStatusResponse(ResponseEnvelope):
    items: List[StatusItem] = field(default_factory=list)


@dataclass
class GetMultipleItemsResponse(ResponseEnvelope):
    items: List[SimpleItem] = field(default_factory=list)


@dataclass
class GetShippingCostsResponse(ResponseEnvelope):
    pick_up_in_store_details: PickUpInStoreDetails = field(default_factory=PickUpInStoreDetails)
    shipping_cost_summary: ShippingCostSummary = field(default_factory=ShippingCostSummary)
    shipping_details: ShippingDetails = field(default_factory=ShippingDetails)


@dataclass
class GetSingleItemResponse(ResponseEnvelope):
    item: SimpleItem = field(default_factory=SimpleItem)


@dataclass
class GetUserProfileResponse(ResponseEnvelope):
    feedback_details: List[FeedbackDetail] = field(default_factory=list)
    feedback_history: FeedbackHistory = field(default_factory=FeedbackHistory)
    user: SimpleUser = field(default_factory=SimpleUser)
