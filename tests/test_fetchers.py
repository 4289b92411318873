"""
Tests for the unifetch fetch pipeline and per-entity fetchers.
"""

import logging
from unittest.mock import Mock

import httpx
import pytest

from unifetch.data.entities import Fruit, Product, User
from unifetch.data.fetch import (
    DataFetcher,
    EnvelopeTransform,
    ErrorKind,
    FetchError,
    FruitDataFetcher,
    InvalidDataFormatError,
    NetworkFailureError,
    ProductDataFetcher,
    UserDataFetcher,
)


class TestEnvelopeTransform:
    """Test cases for envelope validation."""

    def test_well_formed_payload(self):
        """Test a valid envelope becomes typed records."""
        transform = EnvelopeTransform("fruits", Fruit)

        result = transform({"fruits": [{"id": 1, "name": "Apple", "richIn": "Vitamin C"}]})

        assert [f.model_dump(by_alias=True) for f in result] == [
            {"id": 1, "name": "Apple", "richIn": "Vitamin C"}
        ]
        assert isinstance(result[0], Fruit)

    def test_preserves_order(self):
        """Test records keep payload order."""
        transform = EnvelopeTransform("users", User)
        raw = {
            "users": [
                {"id": 3, "name": "C", "email": "c@example.com"},
                {"id": 1, "name": "A", "email": "a@example.com"},
            ]
        }

        assert [u.id for u in transform(raw)] == [3, 1]

    def test_empty_collection(self):
        """Test an empty array is a valid, empty result."""
        assert EnvelopeTransform("fruits", Fruit)({"fruits": []}) == []

    @pytest.mark.parametrize(
        "raw",
        [{}, None, {"fruits": "not-an-array"}, [], "fruits", {"fruit": []}],
    )
    def test_malformed_envelopes_rejected(self, raw):
        """Test malformed envelopes raise InvalidDataFormatError."""
        transform = EnvelopeTransform("fruits", Fruit)

        with pytest.raises(InvalidDataFormatError) as exc_info:
            transform(raw)

        assert exc_info.value.kind is ErrorKind.INVALID_DATA_FORMAT
        assert exc_info.value.collection == "fruits"

    def test_invalid_record_rejects_whole_payload(self):
        """Test one bad record fails the payload instead of being skipped."""
        transform = EnvelopeTransform("fruits", Fruit)
        raw = {
            "fruits": [
                {"id": 1, "name": "Apple", "richIn": "Vitamin C"},
                {"name": "No id", "richIn": "Nothing"},
            ]
        }

        with pytest.raises(InvalidDataFormatError, match="1 validation error"):
            transform(raw)

    @pytest.mark.parametrize("bad_id", ["7", True, 2.0, None])
    def test_mistyped_fields_are_not_coerced(self, bad_id):
        """Test records with wrongly typed fields are rejected, not coerced."""
        transform = EnvelopeTransform("users", User)
        raw = {"users": [{"id": bad_id, "name": "Ada", "email": "ada@example.com"}]}

        with pytest.raises(InvalidDataFormatError) as exc_info:
            transform(raw)

        assert exc_info.value.collection == "users"

    def test_string_price_rejected(self):
        """Test a numeric string is not accepted for a float field."""
        raw = {"products": [{"id": 1, "name": "Pen", "price": "1.50", "description": "Blue"}]}

        with pytest.raises(InvalidDataFormatError):
            EnvelopeTransform("products", Product)(raw)

    def test_integer_price_accepted(self):
        """Test a JSON integer still satisfies a float field."""
        raw = {"products": [{"id": 2, "name": "Keyboard", "price": 79, "description": "Mechanical"}]}

        (product,) = EnvelopeTransform("products", Product)(raw)

        assert product.price == 79

    def test_non_object_record_rejected(self):
        """Test array elements must be objects."""
        with pytest.raises(InvalidDataFormatError):
            EnvelopeTransform("users", User)({"users": [1, 2, 3]})


class TestDataFetcher:
    """Test cases for the DataFetcher pipeline."""

    def _fruit_fetcher(self, settings, client, **kwargs):
        return DataFetcher(
            "fruits",
            EnvelopeTransform("fruits", Fruit),
            settings=settings,
            client=client,
            **kwargs,
        )

    def test_base_url_defaults_to_key(self, test_settings):
        """Test the endpoint segment defaults to the fetcher key."""
        fetcher = DataFetcher("fruits", EnvelopeTransform("fruits", Fruit), settings=test_settings)

        assert fetcher.base_url == "fruits"
        assert fetcher.url == "http://testserver/api/fruits"

    def test_explicit_base_url(self, test_settings):
        """Test an explicit endpoint segment overrides the key."""
        fetcher = DataFetcher(
            "fruits",
            EnvelopeTransform("fruits", Fruit),
            base_url="v2/fruits",
            settings=test_settings,
        )

        assert fetcher.url == "http://testserver/api/v2/fruits"

    @pytest.mark.asyncio
    async def test_fetch_data_success(self, test_settings, stub_client, stub_api):
        """Test fetch_data GETs the endpoint and returns typed records."""
        fetcher = self._fruit_fetcher(test_settings, stub_client)

        fruits = await fetcher.fetch_data()

        assert len(fruits) == 1
        assert fruits[0] == Fruit(id=1, name="Banana", richIn="Potassium")
        assert stub_api.requests[0].method == "GET"
        assert str(stub_api.requests[0].url) == "http://testserver/api/fruits"

    @pytest.mark.asyncio
    async def test_non_2xx_is_network_failure(self, test_settings, make_client, caplog):
        """Test a non-2xx status surfaces NetworkFailureError after one handle_error."""
        client = make_client(lambda request: httpx.Response(503, text="unavailable"))
        fetcher = self._fruit_fetcher(test_settings, client)
        fetcher.handle_error = Mock(wraps=fetcher.handle_error)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(NetworkFailureError) as exc_info:
                await fetcher.fetch_data()

        fetcher.handle_error.assert_called_once_with(exc_info.value)
        assert exc_info.value.status_code == 503
        assert exc_info.value.key == "fruits"
        assert exc_info.value.url == "http://testserver/api/fruits"
        error_records = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(error_records) == 1
        assert "fruits" in error_records[0].getMessage()

    @pytest.mark.asyncio
    async def test_transport_error_is_network_failure(self, test_settings, make_client):
        """Test connection errors become NetworkFailureError without a status."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = self._fruit_fetcher(test_settings, make_client(handler))

        with pytest.raises(NetworkFailureError) as exc_info:
            await fetcher.fetch_data()

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_invalid_json_is_invalid_data_format(self, test_settings, make_client):
        """Test an unparseable body raises InvalidDataFormatError."""
        client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        fetcher = self._fruit_fetcher(test_settings, client)

        with pytest.raises(InvalidDataFormatError):
            await fetcher.fetch_data()

    @pytest.mark.asyncio
    async def test_wrong_envelope_routed_through_handle_error(self, test_settings, make_client):
        """Test validation failures pass through handle_error with the key attached."""
        client = make_client(lambda request: httpx.Response(200, json={"fruits": "nope"}))
        hook = Mock()
        fetcher = self._fruit_fetcher(test_settings, client, on_error=hook)

        with pytest.raises(InvalidDataFormatError) as exc_info:
            await fetcher.fetch_data()

        hook.assert_called_once_with(fetcher, exc_info.value)
        assert exc_info.value.key == "fruits"

    def test_handle_error_reraises_unchanged(self, test_settings):
        """Test handle_error raises the very same error object."""
        fetcher = DataFetcher("users", EnvelopeTransform("users", User), settings=test_settings)
        error = NetworkFailureError("down")

        with pytest.raises(NetworkFailureError) as exc_info:
            fetcher.handle_error(error)

        assert exc_info.value is error
        assert error.key == "users"

    def test_handle_error_keeps_other_exceptions(self, test_settings):
        """Test unexpected exceptions are re-raised, not wrapped or dropped."""
        fetcher = DataFetcher("users", EnvelopeTransform("users", User), settings=test_settings)

        with pytest.raises(RuntimeError, match="bug"):
            fetcher.handle_error(RuntimeError("bug"))

    def test_string_representations(self, test_settings):
        """Test string representations of fetcher."""
        fetcher = DataFetcher("users", EnvelopeTransform("users", User), settings=test_settings)

        assert str(fetcher) == "DataFetcher(key=users)"
        assert "EnvelopeTransform(collection='users', entity=User)" in repr(fetcher)


class TestEntityFetchers:
    """Test cases for the built-in entity fetcher factories."""

    @pytest.mark.parametrize(
        "factory,key,entity",
        [
            (UserDataFetcher, "users", User),
            (ProductDataFetcher, "products", Product),
            (FruitDataFetcher, "fruits", Fruit),
        ],
    )
    def test_factory_builds_configured_fetcher(self, factory, key, entity, test_settings):
        """Test each factory builds a fetcher for its entity."""
        fetcher = factory(key, test_settings)

        assert isinstance(fetcher, DataFetcher)
        assert fetcher.fetcher_key == key
        assert fetcher.base_url == key
        assert fetcher.transform.collection == key
        assert fetcher.transform.entity is entity

    @pytest.mark.asyncio
    async def test_user_fetcher_end_to_end(self, test_settings, stub_client):
        """Test UserDataFetcher against the stub API."""
        users = await UserDataFetcher("users", test_settings, client=stub_client).fetch_data()

        assert [u.name for u in users] == ["Leanne Graham", "Ervin Howell"]

    @pytest.mark.asyncio
    async def test_product_fetcher_rejects_fruit_payload(self, test_settings, make_client, payloads):
        """Test a fetcher rejects an envelope meant for another entity."""
        client = make_client(lambda request: httpx.Response(200, json=payloads["fruits"]))

        with pytest.raises(FetchError) as exc_info:
            await ProductDataFetcher("products", test_settings, client=client).fetch_data()

        assert exc_info.value.kind is ErrorKind.INVALID_DATA_FORMAT
