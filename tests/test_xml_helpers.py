"""Tests for ebay_shopping.xml_helpers."""

from decimal import Decimal

import pytest
from lxml import etree

from ebay_shopping.xml_helpers import (
    add_element,
    child,
    get_bool,
    get_int,
    get_text,
    get_texts,
    new_root,
    parse_bool,
    parse_decimal,
    parse_xml,
    to_bytes,
)


def test_parse_bool():
    assert parse_bool("true") is True
    assert parse_bool("1") is True
    assert parse_bool("False") is False
    assert parse_bool("0") is False
    assert parse_bool("") is False
    with pytest.raises(ValueError):
        parse_bool("yes")


def test_parse_decimal():
    assert parse_decimal("12.50") == Decimal("12.50")
    assert parse_decimal("") == Decimal("0")
    with pytest.raises(ValueError):
        parse_decimal("twelve")


def test_lookup_ignores_namespace():
    qualified = parse_xml(
        b'<R xmlns="urn:ebay:apis:eBLBaseComponents"><Count>3</Count><Tag>a</Tag><Tag>b</Tag></R>'
    )
    plain = parse_xml(b"<R><Count>3</Count><Tag>a</Tag><Tag>b</Tag></R>")
    for root in (qualified, plain):
        assert get_int(root, "Count") == 3
        assert get_texts(root, "Tag") == ["a", "b"]


def test_missing_elements_give_zero_values():
    root = parse_xml(b"<R/>")
    assert child(root, "Nope") is None
    assert get_text(root, "Nope") == ""
    assert get_int(root, "Nope") == 0
    assert get_bool(root, "Nope") is False
    assert get_texts(None, "Nope") == []


def test_comments_are_skipped():
    root = parse_xml(b"<R><!-- note --><Tag>a</Tag></R>")
    assert get_texts(root, "Tag") == ["a"]


def test_entities_are_not_expanded():
    body = (
        b'<?xml version="1.0"?><!DOCTYPE R [<!ENTITY ext SYSTEM "file:///etc/passwd">]>'
        b"<R><Tag>&ext;</Tag></R>"
    )
    root = parse_xml(body)
    assert "root:" not in get_text(root, "Tag")


def test_written_elements_are_namespaced():
    root = new_root("GeteBayTimeRequest")
    add_element(root, "MessageID", "m-1")
    doc = etree.fromstring(to_bytes(root))
    assert doc.nsmap == {None: "urn:ebay:apis:eBLBaseComponents"}
    assert doc[0].tag == "{urn:ebay:apis:eBLBaseComponents}MessageID"
