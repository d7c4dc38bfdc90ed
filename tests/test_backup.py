import json
from datetime import datetime, timezone

import pytest

from stockbook.models.seed import INITIAL_USERS
from stockbook.services.backup import (
    BackupError, backup_filename, build_backup, csv_filename, export_csv, parse_backup,
)

from conftest import make_movement, make_product


def test_export_csv_layout():
    products = [
        make_product(id='p1', sku='V254-001', name='Bullet', category='Vibrators', stock=42,
                     cost_price=1500, sell_price=3000.0, supplier='Global', barcode='123'),
        make_product(id='p2', sku='V254-002', name='Oil', category='Accessories', stock=0,
                     cost_price=7.5, sell_price=18, supplier='N/A', barcode='N/A'),
    ]
    lines = export_csv(products).splitlines()
    assert lines[0] == 'ID,SKU,Name,Category,Stock,Cost,Price,Supplier,Barcode'
    assert lines[1] == 'p1,V254-001,Bullet,Vibrators,42,1500,3000,Global,123'
    assert lines[2] == 'p2,V254-002,Oil,Accessories,0,7.5,18,N/A,N/A'


def test_export_csv_quotes_embedded_commas():
    text = export_csv([make_product(name='Oil, large')])
    assert '"Oil, large"' in text


def test_filenames():
    assert backup_filename(1700000000123) == 'backup_v254_1700000000123.json'
    assert csv_filename(datetime(2026, 3, 9, 23, 30, tzinfo=timezone.utc)) == 'inventory_export_2026-03-09.csv'


def test_build_backup_shape():
    data = build_backup([make_product()], [make_movement()], INITIAL_USERS)
    assert set(data) == {'products', 'movements', 'users'}
    assert data['products'][0]['lowStockThreshold'] == 5
    assert data['movements'][0]['balanceAfter'] == 1
    assert data['users'][0] == {'id': 'u1', 'name': 'Admin User', 'email': 'admin@v254.com', 'role': 'admin'}


def test_parse_backup_missing_fields_mean_unchanged():
    products, movements = parse_backup(json.dumps({'users': []}))
    assert products is None
    assert movements is None


def test_parse_backup_accepts_bytes_with_bom():
    raw = '\ufeff' + json.dumps({'movements': [make_movement().to_dict()]})
    products, movements = parse_backup(raw.encode('utf-8'))
    assert products is None
    assert movements[0].id == 'm-test'


@pytest.mark.parametrize('raw', ['{', '"just a string"', 'null', b'\xff\xfe\x00'])
def test_parse_backup_rejects_invalid(raw):
    with pytest.raises(BackupError):
        parse_backup(raw)


def test_parse_backup_rejects_badly_typed_movement():
    doc = make_movement().to_dict()
    doc['productName'] = 42
    with pytest.raises(BackupError):
        parse_backup({'movements': [doc]})
