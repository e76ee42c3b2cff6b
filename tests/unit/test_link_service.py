from unittest.mock import Mock

import pytest

from shortlinks.core.errors import GenerationError, NotFoundError, StoreError, ValidationError
from shortlinks.db.memory import InMemoryUrlStore
from shortlinks.services.codes import CodeGenerator
from shortlinks.services.links import LinkService, build_short_url


@pytest.mark.parametrize("long_url", [None, "", "   "])
def test_blank_url_never_reaches_generator(long_url):
    store = Mock()
    generator = Mock()

    with pytest.raises(ValidationError, match="URL required"):
        LinkService(store, generator).shorten(long_url)

    generator.generate.assert_not_called()
    store.insert.assert_not_called()


def test_shorten_inserts_generated_code():
    store = Mock()
    generator = Mock()
    generator.generate.return_value = "abc1234"

    code = LinkService(store, generator).shorten("  https://example.com/?q=a b  ")

    assert code == "abc1234"
    # stored exactly as given
    store.insert.assert_called_once_with("  https://example.com/?q=a b  ", "abc1234")


def test_generation_error_skips_insert():
    store = Mock()
    generator = Mock()
    generator.generate.side_effect = GenerationError("failed to generate unique code after 10 attempts")

    with pytest.raises(GenerationError):
        LinkService(store, generator).shorten("https://example.com")

    store.insert.assert_not_called()


def test_insert_failure_propagates():
    store = Mock()
    store.insert.side_effect = StoreError("insert failed")
    generator = Mock()
    generator.generate.return_value = "abc1234"

    with pytest.raises(StoreError):
        LinkService(store, generator).shorten("https://example.com")


def test_follow_counts_and_returns_record():
    store = InMemoryUrlStore()
    service = LinkService(store, CodeGenerator(store))
    code = service.shorten("https://example.com")

    record = service.follow(code)

    assert record.long_url == "https://example.com"
    assert store.fetch_by_code(code).times_followed == 1


def test_follow_survives_increment_failure(caplog):
    store = InMemoryUrlStore()
    store.insert("https://example.com", "abc1234")
    store.increment_follow_count = Mock(side_effect=StoreError("increment failed"))

    with caplog.at_level("WARNING", logger="shortlinks"):
        record = LinkService(store, Mock()).follow("abc1234")

    assert record.long_url == "https://example.com"
    assert "Could not increment times_followed for abc1234" in caplog.text


def test_follow_missing_never_increments():
    store = Mock()
    store.fetch_by_code.side_effect = NotFoundError("no url")

    with pytest.raises(NotFoundError):
        LinkService(store, Mock()).follow("nothere")

    store.increment_follow_count.assert_not_called()


def test_lookup_does_not_count():
    store = InMemoryUrlStore()
    store.insert("https://example.com", "abc1234")

    LinkService(store, Mock()).lookup("abc1234")

    assert store.fetch_by_code("abc1234").times_followed == 0


@pytest.mark.parametrize(
    "base_url",
    ["http://testserver", "http://testserver/"],
)
def test_build_short_url(base_url):
    assert build_short_url(base_url, "abc1234") == "http://testserver/abc1234"


def test_follow_store_failure_is_not_found():
    store = Mock()
    store.fetch_by_code.side_effect = StoreError("fetch failed")

    with pytest.raises(NotFoundError) as excinfo:
        LinkService(store, Mock()).follow("abc1234")

    assert isinstance(excinfo.value.__cause__, StoreError)
    store.increment_follow_count.assert_not_called()


def test_resolve_does_not_count():
    store = InMemoryUrlStore()
    store.insert("https://example.com", "abc1234")

    record = LinkService(store, Mock()).resolve("abc1234")

    assert record.long_url == "https://example.com"
    assert store.fetch_by_code("abc1234").times_followed == 0
