from flask_caching import Cache

from dashboard import create_app, query_cache
from dashboard.actions import create_invoice
from dashboard.cache import PathCache, get_path_cache, revalidate_path
from dashboard.data import fetch_filtered_invoices
from dashboard.state import ActionState


def test_get_or_set_reuses_value_until_invalidated(app):
    cache = get_path_cache()
    calls = []

    def factory():
        calls.append(1)
        return len(calls)

    assert cache.get_or_set("/dashboard/invoices", ("", 1), factory) == 1
    assert cache.get_or_set("/dashboard/invoices", ("", 1), factory) == 1
    assert cache.get_or_set("/dashboard/invoices", ("", 2), factory) == 2

    cache.invalidate("/dashboard/invoices")
    assert cache.get_or_set("/dashboard/invoices", ("", 1), factory) == 3
    assert cache.get_or_set("/dashboard/invoices", ("", 2), factory) == 4


def test_invalidate_only_touches_its_path(app):
    cache = get_path_cache()
    cache.get_or_set("/a", "k", lambda: "a")
    cache.get_or_set("/b", "k", lambda: "b")
    cache.invalidate("/a")
    assert cache.get_or_set("/a", "k", lambda: "new") == "new"
    assert cache.get_or_set("/b", "k", lambda: "new") == "b"


def test_invalidation_during_computation_is_not_lost(app):
    cache = get_path_cache()

    def racing_read():
        value = "stale"
        cache.invalidate("/p")
        return value

    assert cache.get_or_set("/p", "k", racing_read) == "stale"
    assert cache.get_or_set("/p", "k", lambda: "fresh") == "fresh"


def test_null_backend_disables_caching(app):
    cache = PathCache(Cache(app, config={"CACHE_TYPE": "NullCache"}))
    values = iter(range(10))
    assert cache.get_or_set("/a", "k", lambda: next(values)) == 0
    assert cache.get_or_set("/a", "k", lambda: next(values)) == 1


def test_revalidate_path_uses_app_cache(app):
    assert app.config["CACHE_TYPE"] == "FileSystemCache"
    cache = get_path_cache()
    assert cache.backend is query_cache
    cache.get_or_set("/dashboard/invoices", "k", lambda: "cached")
    revalidate_path("/dashboard/invoices")
    assert cache.get_or_set("/dashboard/invoices", "k", lambda: "fresh") == "fresh"


def test_invalidation_reaches_every_worker(app, customer):
    # A second app on the same database and cache directory stands in for
    # another gunicorn worker process.
    other = create_app(["--demo"])

    def load():
        return fetch_filtered_invoices()

    with other.app_context():
        assert get_path_cache().get_or_set("/dashboard/invoices", ("", 1), load) == []

    with app.test_request_context():
        create_invoice(
            ActionState(), {"customer_id": customer, "amount": "42.10", "status": "paid"}
        )

    with other.app_context():
        rows = get_path_cache().get_or_set("/dashboard/invoices", ("", 1), load)
    assert [row["amount"] for row in rows] == [4210]
