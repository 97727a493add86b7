"""
Tests for ebay_shopping.service.ShoppingService.

End-to-end execute() tests patch requests.Session inside shopping_client and
answer with the XML fixtures, so the whole build -> POST -> parse path runs
without network access.
"""

import os
from unittest.mock import MagicMock, patch

import pytest
import requests
from lxml import etree

from ebay_shopping.calls import (
    FindProductsRequest,
    GetCategoryInfoRequest,
    GeteBayTimeRequest,
    GetItemStatusRequest,
    GetMultipleItemsRequest,
    GetShippingCostsRequest,
    GetSingleItemRequest,
    GetUserProfileRequest,
)
from ebay_shopping.constants import ENDPOINT_PRODUCTION, ENDPOINT_SANDBOX, AckCode, SiteID
from ebay_shopping.errors import RemoteCallFailed, SerializationFailed, TransportFailed
from ebay_shopping.service import ShoppingService
from ebay_shopping.settings import ServiceConfig

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def load_fixture(filename):
    with open(os.path.join(FIXTURES_DIR, filename), "rb") as fh:
        return fh.read()


def ok_response(filename):
    response = MagicMock()
    response.status_code = 200
    response.content = load_fixture(filename)
    return response


def sent_body(mock_session, call_index=-1):
    """Parsed root of the XML document passed to session.post()."""
    return etree.fromstring(mock_session.post.call_args_list[call_index].kwargs["data"])


@pytest.fixture
def mock_session():
    with patch("ebay_shopping.shopping_client.requests.Session") as mock_session_cls:
        yield mock_session_cls.return_value


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestConfiguration:
    def test_defaults(self):
        service = ShoppingService("my-token")
        assert service.config.token == "my-token"
        assert service.config.endpoint == ENDPOINT_PRODUCTION
        assert service.config.site_id == SiteID.US
        assert service.config.timeout == 10.0
        assert service.config.version == "1199"

    def test_explicit_config(self):
        config = ServiceConfig(token="t", endpoint=ENDPOINT_SANDBOX, site_id=SiteID.AU)
        assert ShoppingService(config=config).config is config

    def test_with_endpoint_aliases_and_urls(self):
        service = ShoppingService("t").with_endpoint("sandbox")
        assert service.config.endpoint == ENDPOINT_SANDBOX

        service.with_endpoint("http://localhost:8080/shopping")
        assert service.config.endpoint == "http://localhost:8080/shopping"

    def test_with_site_id(self):
        service = ShoppingService("t").with_site_id("77")
        assert service.config.site_id is SiteID.DE

        service.with_site_id(SiteID.SG)
        assert service.config.site_id is SiteID.SG

    def test_with_site_id_rejects_unknown(self):
        service = ShoppingService("t")
        with pytest.raises(ValueError):
            service.with_site_id("999")
        assert service.config.site_id == SiteID.US

    def test_with_timeout_and_token(self):
        service = ShoppingService("t").with_timeout(3).with_token("new")
        assert service.config.timeout == 3.0
        assert service.config.token == "new"

    def test_from_env(self):
        env = {"EBAY_IAF_TOKEN": "env-token", "EBAY_SITE_ID": "3", "EBAY_SHOPPING_ENDPOINT": "sandbox"}
        with patch.dict(os.environ, env, clear=True):
            service = ShoppingService.from_env(None)

        assert service.config.token == "env-token"
        assert service.config.site_id == SiteID.GB
        assert service.config.endpoint == ENDPOINT_SANDBOX


# ---------------------------------------------------------------------------
# Request factories
# ---------------------------------------------------------------------------


class TestFactories:
    @pytest.mark.parametrize("factory, expected", [
        ("new_find_products_request", FindProductsRequest),
        ("new_get_category_info_request", GetCategoryInfoRequest),
        ("new_get_ebay_time_request", GeteBayTimeRequest),
        ("new_get_item_status_request", GetItemStatusRequest),
        ("new_get_multiple_items_request", GetMultipleItemsRequest),
        ("new_get_shipping_costs_request", GetShippingCostsRequest),
        ("new_get_single_item_request", GetSingleItemRequest),
        ("new_get_user_profile_request", GetUserProfileRequest),
    ])
    def test_factory_returns_fresh_builder(self, factory, expected):
        service = ShoppingService("t")
        first = getattr(service, factory)()
        second = getattr(service, factory)()

        assert isinstance(first, expected)
        assert first is not second
        assert first.client is not second.client
        assert first.client.headers["X-EBAY-API-CALL-NAME"] == expected.OPERATION.value

    def test_category_info_with_category_id(self):
        request = ShoppingService("t").new_get_category_info_request("-1")
        assert request.category_id == "-1"
        assert ShoppingService("t").new_get_category_info_request().category_id is None

    def test_requests_keep_their_config_snapshot(self):
        service = ShoppingService("t")
        before = service.new_get_ebay_time_request()

        service.with_site_id(SiteID.GB).with_endpoint("sandbox")
        after = service.new_get_ebay_time_request()

        assert before.config.site_id == SiteID.US
        assert before.url == ENDPOINT_PRODUCTION
        assert before.client.headers["X-EBAY-API-SITE-ID"] == "0"
        assert after.url == ENDPOINT_SANDBOX
        assert after.client.headers["X-EBAY-API-SITE-ID"] == "3"


# ---------------------------------------------------------------------------
# execute()
# ---------------------------------------------------------------------------


class TestExecute:
    def test_ebay_time(self, mock_session):
        mock_session.post.return_value = ok_response("ebay_time.xml")

        response = ShoppingService("t").new_get_ebay_time_request().execute()

        assert response.ack == AckCode.SUCCESS
        assert response.timestamp == "2021-06-14T09:15:43.861Z"
        args, kwargs = mock_session.post.call_args
        assert args == (ENDPOINT_PRODUCTION,)
        assert kwargs["timeout"] == 10.0
        assert etree.QName(sent_body(mock_session)).localname == "GeteBayTimeRequest"

    def test_find_products(self, mock_session):
        mock_session.post.return_value = ok_response("find_products.xml")

        request = (
            ShoppingService("t")
            .new_find_products_request()
            .with_query_keywords("Harry Potter")
            .with_max_entries(2)
        )
        response = request.execute()

        assert len(response.products) == 2
        assert response.products[0].title.startswith("Harry Potter and the Sorcerer's Stone")
        root = sent_body(mock_session)
        assert [etree.QName(el).localname for el in root] == ["MaxEntries", "QueryKeywords"]

    def test_category_info_failure_is_a_response(self, mock_session):
        mock_session.post.return_value = ok_response("failure_response.xml")

        response = ShoppingService("t").new_get_category_info_request("abc").execute()

        assert response.ack == AckCode.FAILURE
        assert response.errors[0].code == "10.4"

    def test_sandbox_endpoint_used(self, mock_session):
        mock_session.post.return_value = ok_response("item_status.xml")

        service = ShoppingService("t").with_endpoint("sandbox")
        response = service.new_get_item_status_request().with_item_ids("111", "222").execute()

        assert [i.item_id for i in response.items] == ["111", "222"]
        assert mock_session.post.call_args.args == (ENDPOINT_SANDBOX,)

    def test_request_can_be_executed_again(self, mock_session):
        mock_session.post.return_value = ok_response("user_profile.xml")

        request = ShoppingService("t").new_get_user_profile_request().with_user_id("first")
        request.execute()
        request.with_user_id("vintage_threads")
        response = request.execute()

        assert response.user.user_id == "vintage_threads"
        assert mock_session.post.call_count == 2
        ns = {"e": "urn:ebay:apis:eBLBaseComponents"}
        assert sent_body(mock_session, 0).findtext("e:UserID", namespaces=ns) == "first"
        assert sent_body(mock_session, 1).findtext("e:UserID", namespaces=ns) == "vintage_threads"

    def test_http_error_propagates(self, mock_session):
        response = MagicMock(status_code=503, text="Service Unavailable")
        mock_session.post.return_value = response

        with pytest.raises(RemoteCallFailed) as exc_info:
            ShoppingService("t").new_get_single_item_request().with_item_id("1").execute()
        assert exc_info.value.status_code == 503

    def test_transport_error_propagates(self, mock_session):
        mock_session.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportFailed):
            ShoppingService("t").new_get_ebay_time_request().execute()

    def test_unexpected_response_document(self, mock_session):
        mock_session.post.return_value = ok_response("category_info.xml")

        with pytest.raises(SerializationFailed):
            ShoppingService("t").new_get_shipping_costs_request().with_item_id("1").execute()

    def test_invalid_request_is_not_sent(self, mock_session):
        request = ShoppingService("t").new_get_user_profile_request().with_user_id("bad\x01id")

        with pytest.raises(SerializationFailed):
            request.execute()
        mock_session.post.assert_not_called()
