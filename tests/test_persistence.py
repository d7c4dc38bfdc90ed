from stockbook.models.blob import KeyValueBlob
from stockbook.services.persistence import MemoryBlobStore, SqlBlobStore


def test_sql_blob_store_round_trip(app):
    with app.app_context():
        adapter = SqlBlobStore()
        assert adapter.load('nothing-here', fallback=[1]) == [1]

        adapter.save('widgets', [{'a': 1}, {'b': [2, 3]}])
        assert adapter.load('widgets') == [{'a': 1}, {'b': [2, 3]}]

        adapter.save('widgets', [])
        assert adapter.load('widgets', fallback=None) == []
        assert KeyValueBlob.query.filter_by(key='widgets').count() == 1


def test_app_startup_seeds_the_blob_table(app):
    with app.app_context():
        adapter = SqlBlobStore()
        products = adapter.load('products')
        movements = adapter.load('movements')
    assert [p['sku'] for p in products] == ['V254-001', 'V254-002', 'V254-003']
    assert [m['id'] for m in movements] == ['m2', 'm1']


def test_memory_blob_store():
    adapter = MemoryBlobStore({'k': {'x': 1}})
    assert adapter.load('k') == {'x': 1}
    assert adapter.load('missing', 'fallback') == 'fallback'
    adapter.save('k', None)
    # a stored null is still a stored value
    assert adapter.load('k', 'fallback') is None
