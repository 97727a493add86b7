"""
Response Parser — Maps raw Shopping API XML responses onto the typed models.

This module sits between the transport (ShoppingHTTPClient.post() returns the
raw body) and the caller. It takes the XML document and produces the
per-operation response dataclass without interpreting it: the acknowledgement
code and the error list are copied verbatim.

Every response document has this shape:

    <GetSingleItemResponse xmlns="urn:ebay:apis:eBLBaseComponents">
      <Timestamp>2021-05-02T10:11:12.345Z</Timestamp>
      <Ack>Success</Ack>
      <Build>E1199_CORE_APILW_19170841_R1</Build>
      <Version>1199</Version>
      <CorrelationID>...</CorrelationID>      (only if MessageID was sent)
      <Errors>...</Errors>                    (zero or more)
      ...operation payload...
    </GetSingleItemResponse>

Key behaviors:
  - Elements are matched by local name, so the namespace is optional.
  - Unknown elements are ignored; missing elements keep model zero values.
  - A body that is not well-formed XML, whose root element is not the
    expected <{Operation}Response>, or whose typed values do not convert
    (e.g. "abc" in an integer field) raises SerializationFailed.
"""

import logging
from typing import Callable, Dict, List, Optional

from lxml import etree

from .constants import Operation
from .errors import SerializationFailed
from .models import (
    Address,
    AverageRatingDetails,
    BasicUser,
    BusinessSellerDetails,
    Category,
    Domain,
    ErrorDetail,
    ErrorParameter,
    FeedbackDetail,
    FeedbackHistory,
    FeedbackPeriod,
    FindProductsResponse,
    GetCategoryInfoResponse,
    GeteBayTimeResponse,
    GetItemStatusResponse,
    GetMultipleItemsResponse,
    GetShippingCostsResponse,
    GetSingleItemResponse,
    GetUserProfileResponse,
    InternationalShippingServiceOption,
    NameValueList,
    PickUpInStoreDetails,
    Price,
    Product,
    ProductID,
    ResponseEnvelope,
    ReturnPolicy,
    SalesTax,
    Seller,
    ShippingCostSummary,
    ShippingDetails,
    ShippingServiceOption,
    SimpleItem,
    SimpleUser,
    StatusItem,
    Storefront,
    TaxJurisdiction,
    Variation,
    Variations,
)
from .xml_helpers import (
    child,
    children,
    get_bool,
    get_float,
    get_int,
    get_text,
    get_texts,
    local_name,
    parse_decimal,
    parse_xml,
    text_of,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shared value objects
# ---------------------------------------------------------------------------

def parse_price(parent: Optional[etree._Element], name: str) -> Price:
    element = child(parent, name)
    if element is None:
        return Price()
    return Price(
        currency_id=element.get("currencyID", ""),
        value=parse_decimal(text_of(element)),
    )


def parse_name_value_lists(container: Optional[etree._Element]) -> List[NameValueList]:
    """Read the NameValueList children of an ItemSpecifics/VariationSpecifics container."""
    return [
        NameValueList(name=get_text(nvl, "Name"), values=get_texts(nvl, "Value"))
        for nvl in children(container, "NameValueList")
    ]


def parse_product_id(element: etree._Element) -> ProductID:
    return ProductID(code_type=element.get("type", ""), value=text_of(element))


def parse_basic_user(element: Optional[etree._Element]) -> BasicUser:
    return BasicUser(
        feedback_private=get_bool(element, "FeedbackPrivate"),
        feedback_rating_star=get_text(element, "FeedbackRatingStar"),
        feedback_score=get_int(element, "FeedbackScore"),
        user_id=get_text(element, "UserID"),
    )


def parse_error(element: etree._Element) -> ErrorDetail:
    parameters = [
        ErrorParameter(param_id=param.get("ParamID", ""), value=get_text(param, "Value"))
        for param in children(element, "ErrorParameters")
    ]
    return ErrorDetail(
        classification=get_text(element, "ErrorClassification"),
        code=get_text(element, "ErrorCode"),
        parameters=parameters,
        long_message=get_text(element, "LongMessage"),
        severity=get_text(element, "SeverityCode"),
        short_message=get_text(element, "ShortMessage"),
    )


def parse_shipping_cost_summary(element: Optional[etree._Element]) -> ShippingCostSummary:
    return ShippingCostSummary(
        import_charge=parse_price(element, "ImportCharge"),
        insurance_cost=parse_price(element, "InsuranceCost"),
        insurance_option=get_text(element, "InsuranceOption"),
        listed_shipping_service_cost=parse_price(element, "ListedShippingServiceCost"),
        shipping_service_cost=parse_price(element, "ShippingServiceCost"),
        shipping_service_name=get_text(element, "ShippingServiceName"),
        shipping_type=get_text(element, "ShippingType"),
    )


class ResponseParser:
    """Parses Shopping API response bodies into response models.

    One parse routine per operation; parse() dispatches on the Operation and
    wraps every conversion problem in SerializationFailed.
    """

    def __init__(self):
        self._routines: Dict[Operation, Callable] = {
            Operation.FIND_PRODUCTS: self._parse_find_products,
            Operation.GET_CATEGORY_INFO: self._parse_category_info,
            Operation.GET_EBAY_TIME: self._parse_ebay_time,
            Operation.GET_ITEM_STATUS: self._parse_item_status,
            Operation.GET_MULTIPLE_ITEMS: self._parse_multiple_items,
            Operation.GET_SHIPPING_COSTS: self._parse_shipping_costs,
            Operation.GET_SINGLE_ITEM: self._parse_single_item,
            Operation.GET_USER_PROFILE: self._parse_user_profile,
        }

    def parse(self, operation: Operation, body: bytes) -> ResponseEnvelope:
        """Parse a response body for the given operation.

        Args:
            operation: The call the body answers.
            body: Raw response bytes from the transport.

        Returns:
            The operation's response dataclass.

        Raises:
            SerializationFailed: If the body cannot be mapped onto the model.
        """
        operation = Operation(operation)

        try:
            root = parse_xml(body)
        except etree.XMLSyntaxError as e:
            raise SerializationFailed(
                f"{operation.value} response is not well-formed XML: {e}",
                operation=operation.value,
                cause=e,
            ) from e

        if local_name(root) != operation.response_root:
            raise SerializationFailed(
                f"Expected <{operation.response_root}> but got <{local_name(root)}>",
                operation=operation.value,
            )

        try:
            response = self._routines[operation](root)
        except ValueError as e:
            raise SerializationFailed(
                f"{operation.value} response has an invalid value: {e}",
                operation=operation.value,
                cause=e,
            ) from e

        logger.debug(
            "%s parsed: ack=%s errors=%d", operation.value, response.ack, len(response.errors)
        )
        return response

    # -----------------------------------------------------------------------
    # Envelope
    # -----------------------------------------------------------------------

    @staticmethod
    def _envelope(root: etree._Element) -> dict:
        """Keyword arguments for the ResponseEnvelope part of any response."""
        return {
            "ack": get_text(root, "Ack"),
            "build": get_text(root, "Build"),
            "correlation_id": get_text(root, "CorrelationID"),
            "errors": [parse_error(e) for e in children(root, "Errors")],
            "timestamp": get_text(root, "Timestamp"),
            "version": get_text(root, "Version"),
        }

    # -----------------------------------------------------------------------
    # FindProducts
    # -----------------------------------------------------------------------

    def _parse_find_products(self, root: etree._Element) -> FindProductsResponse:
        histogram = child(root, "DomainHistogram")
        return FindProductsResponse(
            **self._envelope(root),
            approximate_pages=get_int(root, "ApproximatePages"),
            domain_histogram=[
                Domain(domain_name=get_text(d, "DomainName"), count=get_int(d, "Count"))
                for d in children(histogram, "Domain")
            ],
            more_results=get_bool(root, "MoreResults"),
            page_number=get_int(root, "PageNumber"),
            products=[self._product(p) for p in children(root, "Product")],
            total_products=get_int(root, "TotalProducts"),
        )

    @staticmethod
    def _product(element: etree._Element) -> Product:
        return Product(
            details_url=get_text(element, "DetailsURL"),
            display_stock_photos=get_bool(element, "DisplayStockPhotos"),
            domain_name=get_text(element, "DomainName"),
            item_specifics=parse_name_value_lists(child(element, "ItemSpecifics")),
            product_ids=[parse_product_id(p) for p in children(element, "ProductID")],
            product_state=get_text(element, "ProductState"),
            review_count=get_int(element, "ReviewCount"),
            stock_photo_url=get_text(element, "StockPhotoURL"),
            title=get_text(element, "Title"),
        )

    # -----------------------------------------------------------------------
    # GetCategoryInfo / GeteBayTime
    # -----------------------------------------------------------------------

    def _parse_category_info(self, root: etree._Element) -> GetCategoryInfoResponse:
        categories = [
            Category(
                category_id=get_text(c, "CategoryID"),
                category_id_path=get_text(c, "CategoryIDPath"),
                category_level=get_int(c, "CategoryLevel"),
                category_name=get_text(c, "CategoryName"),
                category_name_path=get_text(c, "CategoryNamePath"),
                category_parent_id=get_text(c, "CategoryParentID"),
                leaf_category=get_bool(c, "LeafCategory"),
            )
            for c in children(child(root, "CategoryArray"), "Category")
        ]
        return GetCategoryInfoResponse(
            **self._envelope(root),
            categories=categories,
            category_count=get_int(root, "CategoryCount"),
            category_version=get_text(root, "CategoryVersion"),
            update_time=get_text(root, "UpdateTime"),
        )

    def _parse_ebay_time(self, root: etree._Element) -> GeteBayTimeResponse:
        return GeteBayTimeResponse(**self._envelope(root))

    # -----------------------------------------------------------------------
    # GetItemStatus
    # -----------------------------------------------------------------------

    def _parse_item_status(self, root: etree._Element) -> GetItemStatusResponse:
        items = [
            StatusItem(
                bid_count=get_int(i, "BidCount"),
                buy_it_now_available=get_bool(i, "BuyItNowAvailable"),
                converted_current_price=parse_price(i, "ConvertedCurrentPrice"),
                end_time=get_text(i, "EndTime"),
                high_bidder=parse_basic_user(child(i, "HighBidder")),
                item_id=get_text(i, "ItemID"),
                listing_status=get_text(i, "ListingStatus"),
                listing_type=get_text(i, "ListingType"),
                reserve_met=get_bool(i, "ReserveMet"),
                time_left=get_text(i, "TimeLeft"),
            )
            for i in children(root, "Item")
        ]
        return GetItemStatusResponse(**self._envelope(root), items=items)

    # -----------------------------------------------------------------------
    # GetSingleItem / GetMultipleItems
    # -----------------------------------------------------------------------

    def _parse_single_item(self, root: etree._Element) -> GetSingleItemResponse:
        item = child(root, "Item")
        return GetSingleItemResponse(
            **self._envelope(root),
            item=self._simple_item(item) if item is not None else SimpleItem(),
        )

    def _parse_multiple_items(self, root: etree._Element) -> GetMultipleItemsResponse:
        return GetMultipleItemsResponse(
            **self._envelope(root),
            items=[self._simple_item(i) for i in children(root, "Item")],
        )

    def _simple_item(self, element: etree._Element) -> SimpleItem:
        return SimpleItem(
            auto_pay=get_bool(element, "AutoPay"),
            best_offer_enabled=get_bool(element, "BestOfferEnabled"),
            bid_count=get_int(element, "BidCount"),
            business_seller_details=self._business_seller(child(element, "BusinessSellerDetails")),
            buy_it_now_available=get_bool(element, "BuyItNowAvailable"),
            buy_it_now_price=parse_price(element, "BuyItNowPrice"),
            condition_description=get_text(element, "ConditionDescription"),
            condition_display_name=get_text(element, "ConditionDisplayName"),
            condition_id=get_int(element, "ConditionID"),
            converted_buy_it_now_price=parse_price(element, "ConvertedBuyItNowPrice"),
            converted_current_price=parse_price(element, "ConvertedCurrentPrice"),
            country=get_text(element, "Country"),
            current_price=parse_price(element, "CurrentPrice"),
            description=get_text(element, "Description"),
            end_time=get_text(element, "EndTime"),
            gallery_url=get_text(element, "GalleryURL"),
            handling_time=get_int(element, "HandlingTime"),
            high_bidder=parse_basic_user(child(element, "HighBidder")),
            hit_count=get_int(element, "HitCount"),
            item_id=get_text(element, "ItemID"),
            item_specifics=parse_name_value_lists(child(element, "ItemSpecifics")),
            listing_status=get_text(element, "ListingStatus"),
            listing_type=get_text(element, "ListingType"),
            location=get_text(element, "Location"),
            minimum_to_bid=parse_price(element, "MinimumToBid"),
            picture_urls=get_texts(element, "PictureURL"),
            postal_code=get_text(element, "PostalCode"),
            primary_category_id=get_text(element, "PrimaryCategoryID"),
            primary_category_id_path=get_text(element, "PrimaryCategoryIDPath"),
            primary_category_name=get_text(element, "PrimaryCategoryName"),
            quantity=get_int(element, "Quantity"),
            quantity_sold=get_int(element, "QuantitySold"),
            reserve_met=get_bool(element, "ReserveMet"),
            return_policy=self._return_policy(child(element, "ReturnPolicy")),
            seller=self._seller(child(element, "Seller")),
            shipping_cost_summary=parse_shipping_cost_summary(child(element, "ShippingCostSummary")),
            ship_to_locations=get_texts(element, "ShipToLocations"),
            site=get_text(element, "Site"),
            sku=get_text(element, "SKU"),
            start_time=get_text(element, "StartTime"),
            storefront=Storefront(
                store_name=get_text(child(element, "Storefront"), "StoreName"),
                store_url=get_text(child(element, "Storefront"), "StoreURL"),
            ),
            subtitle=get_text(element, "Subtitle"),
            time_left=get_text(element, "TimeLeft"),
            title=get_text(element, "Title"),
            top_rated_listing=get_bool(element, "TopRatedListing"),
            variations=self._variations(child(element, "Variations")),
            view_item_url_for_natural_search=get_text(element, "ViewItemURLForNaturalSearch"),
            watch_count=get_int(element, "WatchCount"),
        )

    @staticmethod
    def _seller(element: Optional[etree._Element]) -> Seller:
        return Seller(
            user_id=get_text(element, "UserID"),
            feedback_rating_star=get_text(element, "FeedbackRatingStar"),
            feedback_score=get_int(element, "FeedbackScore"),
            positive_feedback_percent=get_float(element, "PositiveFeedbackPercent"),
            top_rated_seller=get_bool(element, "TopRatedSeller"),
        )

    @staticmethod
    def _business_seller(element: Optional[etree._Element]) -> BusinessSellerDetails:
        address = child(element, "Address")
        return BusinessSellerDetails(
            additional_contact_information=get_text(element, "AdditionalContactInformation"),
            address=Address(
                city_name=get_text(address, "CityName"),
                company_name=get_text(address, "CompanyName"),
                country_name=get_text(address, "CountryName"),
                first_name=get_text(address, "FirstName"),
                last_name=get_text(address, "LastName"),
                phone=get_text(address, "Phone"),
                postal_code=get_text(address, "PostalCode"),
                state_or_province=get_text(address, "StateOrProvince"),
                street1=get_text(address, "Street1"),
                street2=get_text(address, "Street2"),
            ),
            email=get_text(element, "Email"),
            fax=get_text(element, "Fax"),
            legal_invoice=get_bool(element, "LegalInvoice"),
            trade_registration_number=get_text(element, "TradeRegistrationNumber"),
        )

    @staticmethod
    def _return_policy(element: Optional[etree._Element]) -> ReturnPolicy:
        return ReturnPolicy(
            description=get_text(element, "Description"),
            refund=get_text(element, "Refund"),
            returns_accepted=get_text(element, "ReturnsAccepted"),
            returns_within=get_text(element, "ReturnsWithin"),
            shipping_cost_paid_by=get_text(element, "ShippingCostPaidBy"),
        )

    @staticmethod
    def _variations(element: Optional[etree._Element]) -> Variations:
        variations = [
            Variation(
                quantity=get_int(v, "Quantity"),
                quantity_sold=get_int(child(v, "SellingStatus"), "QuantitySold"),
                sku=get_text(v, "SKU"),
                start_price=parse_price(v, "StartPrice"),
                variation_specifics=parse_name_value_lists(child(v, "VariationSpecifics")),
            )
            for v in children(element, "Variation")
        ]
        return Variations(
            variations=variations,
            variation_specifics_set=parse_name_value_lists(child(element, "VariationSpecificsSet")),
        )

    # -----------------------------------------------------------------------
    # GetShippingCosts
    # -----------------------------------------------------------------------

    def _parse_shipping_costs(self, root: etree._Element) -> GetShippingCostsResponse:
        pickup = child(root, "PickUpInStoreDetails")
        return GetShippingCostsResponse(
            **self._envelope(root),
            pick_up_in_store_details=PickUpInStoreDetails(
                available_for_pickup_in_store=get_bool(pickup, "AvailableForPickupInStore"),
                eligible_for_pickup_in_store=get_bool(pickup, "EligibleForPickupInStore"),
            ),
            shipping_cost_summary=parse_shipping_cost_summary(child(root, "ShippingCostSummary")),
            shipping_details=self._shipping_details(child(root, "ShippingDetails")),
        )

    @staticmethod
    def _shipping_details(element: Optional[etree._Element]) -> ShippingDetails:
        sales_tax = child(element, "SalesTax")
        domestic = [
            ShippingServiceOption(
                estimated_delivery_max_time=get_text(o, "EstimatedDeliveryMaxTime"),
                estimated_delivery_min_time=get_text(o, "EstimatedDeliveryMinTime"),
                expedited_service=get_bool(o, "ExpeditedService"),
                fast_and_free=get_bool(o, "FastAndFree"),
                logistic_plan_type=get_text(o, "LogisticPlanType"),
                shipping_insurance_cost=parse_price(o, "ShippingInsuranceCost"),
                shipping_service_additional_cost=parse_price(o, "ShippingServiceAdditionalCost"),
                shipping_service_cost=parse_price(o, "ShippingServiceCost"),
                shipping_service_cut_off_time=get_text(o, "ShippingServiceCutOffTime"),
                shipping_service_name=get_text(o, "ShippingServiceName"),
                shipping_service_priority=get_int(o, "ShippingServicePriority"),
                shipping_surcharge=parse_price(o, "ShippingSurcharge"),
                shipping_time_max=get_int(o, "ShippingTimeMax"),
                shipping_time_min=get_int(o, "ShippingTimeMin"),
                ships_to=get_texts(o, "ShipsTo"),
            )
            for o in children(element, "ShippingServiceOption")
        ]
        international = [
            InternationalShippingServiceOption(
                estimated_delivery_max_time=get_text(o, "EstimatedDeliveryMaxTime"),
                estimated_delivery_min_time=get_text(o, "EstimatedDeliveryMinTime"),
                import_charge=parse_price(o, "ImportCharge"),
                shipping_service_additional_cost=parse_price(o, "ShippingServiceAdditionalCost"),
                shipping_service_cost=parse_price(o, "ShippingServiceCost"),
                shipping_service_cut_off_time=get_text(o, "ShippingServiceCutOffTime"),
                shipping_service_name=get_text(o, "ShippingServiceName"),
                shipping_service_priority=get_int(o, "ShippingServicePriority"),
                ships_to=get_texts(o, "ShipsTo"),
            )
            for o in children(element, "InternationalShippingServiceOption")
        ]
        jurisdictions = [
            TaxJurisdiction(
                jurisdiction_id=get_text(j, "JurisdictionID"),
                sales_tax_percent=get_float(j, "SalesTaxPercent"),
                shipping_included_in_tax=get_bool(j, "ShippingIncludedInTax"),
            )
            for j in children(child(element, "TaxTable"), "TaxJurisdiction")
        ]
        return ShippingDetails(
            cod_cost=parse_price(element, "CODCost"),
            exclude_ship_to_locations=get_texts(element, "ExcludeShipToLocation"),
            insurance_cost=parse_price(element, "InsuranceCost"),
            insurance_option=get_text(element, "InsuranceOption"),
            international_insurance_cost=parse_price(element, "InternationalInsuranceCost"),
            international_insurance_option=get_text(element, "InternationalInsuranceOption"),
            international_shipping_service_options=international,
            sales_tax=SalesTax(
                sales_tax_amount=parse_price(sales_tax, "SalesTaxAmount"),
                sales_tax_percent=get_float(sales_tax, "SalesTaxPercent"),
                sales_tax_state=get_text(sales_tax, "SalesTaxState"),
                shipping_included_in_tax=get_bool(sales_tax, "ShippingIncludedInTax"),
            ),
            shipping_rate_error_message=get_text(element, "ShippingRateErrorMessage"),
            shipping_service_options=domestic,
            tax_jurisdictions=jurisdictions,
        )

    # -----------------------------------------------------------------------
    # GetUserProfile
    # -----------------------------------------------------------------------

    def _parse_user_profile(self, root: etree._Element) -> GetUserProfileResponse:
        return GetUserProfileResponse(
            **self._envelope(root),
            feedback_details=[self._feedback_detail(d) for d in children(root, "FeedbackDetails")],
            feedback_history=self._feedback_history(child(root, "FeedbackHistory")),
            user=self._simple_user(child(root, "User")),
        )

    @staticmethod
    def _simple_user(element: Optional[etree._Element]) -> SimpleUser:
        return SimpleUser(
            about_me_url=get_text(element, "AboutMeURL"),
            feedback_details_url=get_text(element, "FeedbackDetailsURL"),
            feedback_private=get_bool(element, "FeedbackPrivate"),
            feedback_rating_star=get_text(element, "FeedbackRatingStar"),
            feedback_score=get_int(element, "FeedbackScore"),
            my_world_url=get_text(element, "MyWorldURL"),
            new_user=get_bool(element, "NewUser"),
            positive_feedback_percent=get_float(element, "PositiveFeedbackPercent"),
            registration_date=get_text(element, "RegistrationDate"),
            registration_site=get_text(element, "RegistrationSite"),
            seller_business_type=get_text(element, "SellerBusinessType"),
            seller_items_url=get_text(element, "SellerItemsURL"),
            status=get_text(element, "Status"),
            store_name=get_text(element, "StoreName"),
            store_url=get_text(element, "StoreURL"),
            top_rated_seller=get_bool(element, "TopRatedSeller"),
            user_anonymized=get_bool(element, "UserAnonymized"),
            user_id=get_text(element, "UserID"),
        )

    @staticmethod
    def _feedback_history(element: Optional[etree._Element]) -> FeedbackHistory:
        def periods(container_name: str) -> List[FeedbackPeriod]:
            return [
                FeedbackPeriod(period_in_days=get_int(p, "PeriodInDays"), count=get_int(p, "Count"))
                for p in children(child(element, container_name), "FeedbackPeriod")
            ]

        return FeedbackHistory(
            average_rating_details=[
                AverageRatingDetails(
                    rating_detail=get_text(d, "RatingDetail"),
                    rating=get_float(d, "Rating"),
                    rating_count=get_int(d, "RatingCount"),
                )
                for d in children(element, "AverageRatingDetails")
            ],
            bid_retraction_feedback_periods=periods("BidRetractionFeedbackPeriods"),
            negative_feedback_periods=periods("NegativeFeedbackPeriods"),
            neutral_feedback_periods=periods("NeutralFeedbackPeriods"),
            positive_feedback_periods=periods("PositiveFeedbackPeriods"),
            total_feedback_periods=periods("TotalFeedbackPeriods"),
            unique_negative_feedback_count=get_int(element, "UniqueNegativeFeedbackCount"),
            unique_neutral_feedback_count=get_int(element, "UniqueNeutralFeedbackCount"),
            unique_positive_feedback_count=get_int(element, "UniquePositiveFeedbackCount"),
        )

    @staticmethod
    def _feedback_detail(element: etree._Element) -> FeedbackDetail:
        return FeedbackDetail(
            comment_text=get_text(element, "CommentText"),
            comment_time=get_text(element, "CommentTime"),
            comment_type=get_text(element, "CommentType"),
            commenting_user=get_text(element, "CommentingUser"),
            commenting_user_score=get_int(element, "CommentingUserScore"),
            feedback_id=get_text(element, "FeedbackID"),
            feedback_rating_star=get_text(element, "FeedbackRatingStar"),
            item_id=get_text(element, "ItemID"),
            item_price=parse_price(element, "ItemPrice"),
            item_title=get_text(element, "ItemTitle"),
            role=get_text(element, "Role"),
            transaction_id=get_text(element, "TransactionID"),
        )
