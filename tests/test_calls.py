"""Tests for ebay_shopping.calls: per-operation builder setters and their wire form."""

import pytest
from lxml import etree

from ebay_shopping.calls import (
    ALL_CALLS,
    FindProductsRequest,
    GetCategoryInfoRequest,
    GeteBayTimeRequest,
    GetItemStatusRequest,
    GetMultipleItemsRequest,
    GetShippingCostsRequest,
    GetSingleItemRequest,
    GetUserProfileRequest,
)
from ebay_shopping.constants import (
    CategoryInfoSelector,
    ItemSelector,
    Operation,
    ProductIDCodeType,
    ProductSort,
    SortOrder,
    UserProfileSelector,
)
from ebay_shopping.models import NameValueList, ProductID


def wire_fields(request):
    root = etree.fromstring(request.get_body())
    return [(etree.QName(el).localname, el.text) for el in root]


def test_every_operation_has_a_builder():
    assert {call.OPERATION for call in ALL_CALLS} == set(Operation)


def test_setters_are_chainable():
    request = GetShippingCostsRequest()
    assert request.with_item_id("1") is request
    assert request.with_destination_country_code("US") is request
    assert request.with_message_id("m") is request


# ---------------------------------------------------------------------------
# FindProducts
# ---------------------------------------------------------------------------


class TestFindProducts:
    def test_keywords_and_max_entries(self):
        request = FindProductsRequest().with_query_keywords("Harry Potter").with_max_entries(2)
        assert wire_fields(request) == [
            ("MaxEntries", "2"),
            ("QueryKeywords", "Harry Potter"),
        ]

    def test_paging_values_are_clamped(self):
        request = FindProductsRequest().with_page_number(-5).with_max_entries(50000)
        assert request.page_number == 1
        assert request.max_entries == 10000

    def test_last_write_wins(self):
        request = FindProductsRequest().with_query_keywords("first").with_query_keywords("second")
        assert request.query_keywords == "second"

    def test_product_id(self):
        request = FindProductsRequest().with_product_id(ProductIDCodeType.REFERENCE, "2175489")
        assert request.product_id == ProductID(code_type="Reference", value="2175489")

    def test_unknown_product_id_type_rejected(self):
        with pytest.raises(ValueError):
            FindProductsRequest().with_product_id("SKU", "abc")

    def test_sort_values_go_through_enums(self):
        request = FindProductsRequest().with_product_sort(ProductSort.RATING).with_sort_order("Ascending")
        assert request.product_sort == "Rating"
        assert request.sort_order == SortOrder.ASCENDING.value

        with pytest.raises(ValueError):
            FindProductsRequest().with_product_sort("Cheapest")
        with pytest.raises(ValueError):
            FindProductsRequest().with_sort_order("Sideways")

    def test_domain_names_repeat_and_dedupe(self):
        request = FindProductsRequest().with_domain_name("Books", "Music", "Books")
        assert wire_fields(request) == [("DomainName", "Books"), ("DomainName", "Music")]

    def test_available_items_only(self):
        request = FindProductsRequest().with_available_items_only()
        assert wire_fields(request) == [("AvailableItemsOnly", "true")]

    def test_fields_follow_declared_order(self):
        request = (
            FindProductsRequest()
            .with_sort_order("Descending")
            .with_query_keywords("lamp")
            .with_category_id("112581")
            .with_page_number(2)
        )
        assert [name for name, _ in wire_fields(request)] == [
            "CategoryID", "PageNumber", "QueryKeywords", "SortOrder",
        ]


# ---------------------------------------------------------------------------
# GetCategoryInfo / GeteBayTime
# ---------------------------------------------------------------------------


class TestGetCategoryInfo:
    def test_root_with_child_categories(self):
        request = GetCategoryInfoRequest().with_category_id("-1").with_include_selector("ChildCategories")
        assert wire_fields(request) == [
            ("CategoryID", "-1"),
            ("IncludeSelector", "ChildCategories"),
        ]

    def test_selector_added_twice_is_stored_once(self):
        request = (
            GetCategoryInfoRequest()
            .with_include_selector(CategoryInfoSelector.CHILD_CATEGORIES)
            .with_include_selector("ChildCategories")
        )
        assert list(request.include_selector) == ["ChildCategories"]

    def test_unknown_selector_rejected(self):
        with pytest.raises(ValueError):
            GetCategoryInfoRequest().with_include_selector("Details")


class TestGeteBayTime:
    def test_body_has_no_fields(self):
        assert wire_fields(GeteBayTimeRequest()) == []

    def test_message_id_only(self):
        request = GeteBayTimeRequest().with_message_id("ping-1")
        assert wire_fields(request) == [("MessageID", "ping-1")]


# ---------------------------------------------------------------------------
# GetItemStatus / GetMultipleItems
# ---------------------------------------------------------------------------


class TestGetItemStatus:
    def test_duplicate_ids_collapse(self):
        request = GetItemStatusRequest().with_item_ids("111", "222", "111")
        assert wire_fields(request) == [("ItemID", "111"), ("ItemID", "222")]

    def test_ids_accumulate_across_calls(self):
        request = GetItemStatusRequest().with_item_ids("111").with_item_ids("222")
        assert list(request.item_ids) == ["111", "222"]

    def test_no_ids_means_no_elements(self):
        assert wire_fields(GetItemStatusRequest()) == []


class TestGetMultipleItems:
    def test_selectors_joined_before_item_ids(self):
        request = (
            GetMultipleItemsRequest()
            .with_item_ids("1000000001", "1000000002")
            .with_include_selector("Details", ItemSelector.ITEM_SPECIFICS, "Details")
        )
        assert wire_fields(request) == [
            ("IncludeSelector", "Details,ItemSpecifics"),
            ("ItemID", "1000000001"),
            ("ItemID", "1000000002"),
        ]

    def test_cap_at_twenty_ids(self):
        request = GetMultipleItemsRequest().with_item_ids(*[f"id-{n}" for n in range(30)])
        assert len(request.item_ids) == 20
        assert "id-19" in request.item_ids
        assert "id-20" not in request.item_ids

    def test_unknown_selector_rejected(self):
        with pytest.raises(ValueError):
            GetMultipleItemsRequest().with_include_selector("Everything")


# ---------------------------------------------------------------------------
# GetShippingCosts
# ---------------------------------------------------------------------------


class TestGetShippingCosts:
    def test_all_fields(self):
        request = (
            GetShippingCostsRequest()
            .with_item_id("1234567890")
            .with_destination_country_code("US")
            .with_destination_postal_code("95125")
            .with_include_details(True)
            .with_quantity_sold(2)
        )
        assert wire_fields(request) == [
            ("DestinationCountryCode", "US"),
            ("DestinationPostalCode", "95125"),
            ("IncludeDetails", "true"),
            ("ItemID", "1234567890"),
            ("QuantitySold", "2"),
        ]

    def test_quantity_coerced_to_int(self):
        assert GetShippingCostsRequest().with_quantity_sold("3").quantity_sold == 3


# ---------------------------------------------------------------------------
# GetSingleItem
# ---------------------------------------------------------------------------


class TestGetSingleItem:
    def test_item_with_description_selector(self):
        request = (
            GetSingleItemRequest()
            .with_item_id("1234567890")
            .with_include_selector(ItemSelector.DESCRIPTION)
        )
        assert wire_fields(request) == [
            ("IncludeSelector", "Description"),
            ("ItemID", "1234567890"),
        ]

    def test_variation_specifics_append(self):
        request = (
            GetSingleItemRequest()
            .with_item_id("1")
            .with_variation_specifics("Color", "Black")
            .with_variation_specifics("Size", "M", "L")
        )
        assert request.variation_specifics == [
            NameValueList(name="Color", values=["Black"]),
            NameValueList(name="Size", values=["M", "L"]),
        ]

        root = etree.fromstring(request.get_body())
        ns = {"e": root.nsmap[None]}
        lists = root.findall("e:VariationSpecifics/e:NameValueList", ns)
        assert [nvl.findtext("e:Name", namespaces=ns) for nvl in lists] == ["Color", "Size"]
        assert [v.text for v in lists[1].findall("e:Value", ns)] == ["M", "L"]

    def test_variation_sku(self):
        request = GetSingleItemRequest().with_item_id("1").with_variation_sku("TSHIRT-M-BLK")
        assert ("VariationSKU", "TSHIRT-M-BLK") in wire_fields(request)


# ---------------------------------------------------------------------------
# GetUserProfile
# ---------------------------------------------------------------------------


class TestGetUserProfile:
    def test_user_and_selectors(self):
        request = (
            GetUserProfileRequest()
            .with_user_id("vintage_threads")
            .with_include_selector(UserProfileSelector.FEEDBACK_HISTORY, "Details")
        )
        assert wire_fields(request) == [
            ("IncludeSelector", "FeedbackHistory,Details"),
            ("UserID", "vintage_threads"),
        ]

    def test_item_selector_not_valid_for_profiles(self):
        with pytest.raises(ValueError):
            GetUserProfileRequest().with_include_selector("Variations")
