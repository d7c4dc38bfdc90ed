import pytest

from stockbook.services.catalog import (
    ProductValidationError, build_product, filter_products, find_by_barcode, parse_expiry,
)
from stockbook.services.codes import generate_sku

from conftest import NOW, make_product


@pytest.fixture()
def catalog():
    return [
        make_product(id='1', name='Silicone Bullet', sku='V254-001', category='Vibrators', stock=4, low_stock_threshold=5),
        make_product(id='2', name='Massage Oil', sku='V254-003', category='Accessories', stock=10,
                     low_stock_threshold=5, expiry_date=NOW - 1000),
        make_product(id='3', name='Gift Box', sku='GB-9', category='Bundles', stock=0, low_stock_threshold=2,
                     barcode='555'),
        make_product(id='4', name='Second Box', sku='GB-10', category='Bundles', stock=6, barcode='555'),
    ]


def test_low_filter_scenario():
    low = make_product(id='low', stock=4, low_stock_threshold=5)
    ok = make_product(id='ok', stock=10, low_stock_threshold=5)
    assert filter_products([low, ok], '', 'low', now=NOW) == [low]


def test_search_is_case_insensitive_across_name_sku_category(catalog):
    assert [p.id for p in filter_products(catalog, 'bullet', 'all', now=NOW)] == ['1']
    assert [p.id for p in filter_products(catalog, 'v254', 'all', now=NOW)] == ['1', '2']
    assert [p.id for p in filter_products(catalog, 'BUNDLES', 'all', now=NOW)] == ['3', '4']
    assert filter_products(catalog, 'nothing-like-this', 'all', now=NOW) == []


def test_filter_modes(catalog):
    assert [p.id for p in filter_products(catalog, '', 'low', now=NOW)] == ['1', '3']
    assert [p.id for p in filter_products(catalog, '', 'out', now=NOW)] == ['3']
    assert [p.id for p in filter_products(catalog, '', 'expired', now=NOW)] == ['2']
    assert [p.id for p in filter_products(catalog, '', 'all', now=NOW)] == ['1', '2', '3', '4']


def test_search_and_filter_are_combined(catalog):
    assert [p.id for p in filter_products(catalog, 'box', 'low', now=NOW)] == ['3']
    assert filter_products(catalog, 'oil', 'out', now=NOW) == []


def test_unknown_filter_mode_behaves_as_all(catalog):
    assert len(filter_products(catalog, '', 'weird', now=NOW)) == 4


def test_find_by_barcode_returns_first_match(catalog):
    assert find_by_barcode(catalog, '555').id == '3'
    assert find_by_barcode(catalog, '000') is None


def test_build_product_defaults():
    p = build_product({'name': ' Lube ', 'sellPrice': '1800', 'costPrice': 800, 'stock': '12'},
                      sku_prefix='V254', default_category='Vibrators', now=NOW)
    assert p.name == 'Lube'
    assert p.sku == 'V254-000000'
    assert p.barcode == 'N/A'
    assert p.supplier == 'N/A'
    assert p.category == 'Vibrators'
    assert p.sell_price == 1800
    assert p.cost_price == 800
    assert p.stock == 12
    assert p.low_stock_threshold == 5
    assert p.expiry_date is None
    assert p.image_path.startswith('https://picsum.photos/')


def test_build_product_keeps_supplied_sku_and_expiry():
    p = build_product({'name': 'Oil', 'sellPrice': 5, 'sku': 'OIL-1', 'expiryDate': '2026-01-01'}, now=NOW)
    assert p.sku == 'OIL-1'
    assert p.expiry_date == 1767225600000


@pytest.mark.parametrize('data', [
    {'sellPrice': 10},
    {'name': 'No price'},
    {'name': 'Zero price', 'sellPrice': 0},
    {'name': '   ', 'sellPrice': 10},
    {'name': 'Negative', 'sellPrice': 10, 'costPrice': -1},
])
def test_build_product_validation(data):
    with pytest.raises(ProductValidationError):
        build_product(data, now=NOW)


def test_parse_expiry_rejects_garbage():
    assert parse_expiry('') is None
    assert parse_expiry(NOW) == NOW
    with pytest.raises(ProductValidationError):
        parse_expiry('next tuesday')


def test_generate_sku_skips_taken_codes():
    first = generate_sku(NOW, prefix='V254')
    assert first == 'V254-000000'
    assert generate_sku(NOW, prefix='V254', existing=[first]) == 'V254-000001'


def test_build_product_rejects_structured_text_fields():
    with pytest.raises(ProductValidationError):
        build_product({'name': {'en': 'Oil'}, 'sellPrice': 5}, now=NOW)
    with pytest.raises(ProductValidationError):
        build_product({'name': 'Oil', 'sellPrice': 5, 'barcode': ['1', '2']}, now=NOW)


def test_build_product_stringifies_numeric_text_fields():
    p = build_product({'name': 404, 'sku': 77, 'barcode': 123456, 'sellPrice': '5'}, now=NOW)
    assert (p.name, p.sku, p.barcode) == ('404', '77', '123456')
    assert p.sell_price == 5
