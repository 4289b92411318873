"""
Data fetcher pipeline: GET an endpoint, validate the payload, report failures.

A single ``DataFetcher`` type runs the pipeline for every entity. The only
entity-specific step, turning raw JSON into typed records, is a transform
strategy injected at construction (normally an ``EnvelopeTransform``).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, NoReturn, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ...settings import Settings, settings as default_settings
from ..entities import BaseEntity
from .errors import FetchError, InvalidDataFormatError, NetworkFailureError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)

Transform = Callable[[Any], List[T]]
ErrorHook = Callable[["DataFetcher", Exception], None]


class EnvelopeTransform(Generic[T]):
    """
    Validate a ``{<collection>: [record, ...]}`` envelope into typed records.

    The raw value comes from an untrusted endpoint, so every level is checked:
    the envelope must be a JSON object, the collection field must exist and be
    a list, and each element must validate against ``entity`` in strict mode
    (no string-to-number or bool-to-int coercion; integers still satisfy
    float fields). Nothing is coerced into an empty or partial result.
    """

    def __init__(self, collection: str, entity: Type[T]):
        self.collection = collection
        self.entity = entity
        self._adapter = TypeAdapter(List[entity])

    def __call__(self, raw: Any) -> List[T]:
        if not isinstance(raw, dict):
            raise InvalidDataFormatError(
                f"Expected a JSON object with a '{self.collection}' array, "
                f"got {type(raw).__name__}",
                collection=self.collection,
            )
        if self.collection not in raw:
            raise InvalidDataFormatError(
                f"Payload is missing the '{self.collection}' field",
                collection=self.collection,
            )

        items = raw[self.collection]
        if not isinstance(items, list):
            raise InvalidDataFormatError(
                f"Field '{self.collection}' must be an array, "
                f"got {type(items).__name__}",
                collection=self.collection,
            )

        try:
            return self._adapter.validate_python(items, strict=True)
        except ValidationError as e:
            raise InvalidDataFormatError(
                f"Invalid {self.entity.__name__} records in '{self.collection}': "
                f"{e.error_count()} validation error(s)",
                collection=self.collection,
            ) from e

    def __repr__(self) -> str:
        return f"EnvelopeTransform(collection={self.collection!r}, entity={self.entity.__name__})"


class DataFetcher(Generic[T]):
    """
    Fetches one entity collection from one endpoint.

    ``fetch_data`` is the fixed pipeline; ``transform_data`` delegates to the
    injected strategy; ``handle_error`` logs and re-raises. Instances hold
    configuration only, so building one per lookup or sharing one behaves the
    same.
    """

    def __init__(
        self,
        fetcher_key: str,
        transform: Transform,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        on_error: Optional[ErrorHook] = None,
    ):
        self.fetcher_key = fetcher_key
        self.base_url = base_url or fetcher_key
        self.transform = transform
        self.settings = settings or default_settings
        self.client = client
        self.on_error = on_error
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @property
    def url(self) -> str:
        return self.settings.endpoint_url(self.base_url)

    async def fetch_data(self) -> List[T]:
        """
        GET the endpoint and return its validated records.

        Raises:
            NetworkFailureError: transport failure or non-2xx status
            InvalidDataFormatError: body is not JSON or fails validation
        """
        try:
            raw = await self._get_json()
            records = self.transform_data(raw)
        except Exception as e:
            self.handle_error(e)

        self.logger.debug(f"Fetched {len(records)} {self.fetcher_key} from {self.url}")
        return records

    def transform_data(self, raw: Any) -> List[T]:
        return self.transform(raw)

    def handle_error(self, error: Exception) -> NoReturn:
        """
        Log ``error`` with this fetcher's context and re-raise it unchanged.
        """
        if isinstance(error, FetchError) and error.key is None:
            error.key = self.fetcher_key

        self.logger.error(
            f"Fetch failed for '{self.fetcher_key}' ({self.url}): "
            f"{type(error).__name__}: {error}"
        )
        if self.on_error is not None:
            self.on_error(self, error)
        raise error

    async def _get_json(self) -> Any:
        if self.client is not None:
            return await self._request(self.client)

        async with httpx.AsyncClient(
            timeout=self.settings.request_timeout, follow_redirects=True
        ) as client:
            return await self._request(client)

    async def _request(self, client: httpx.AsyncClient) -> Any:
        url = self.url
        try:
            response = await client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            raise NetworkFailureError(
                f"Request to {url} failed: {e}", key=self.fetcher_key, url=url
            ) from e

        if not response.is_success:
            raise NetworkFailureError(
                f"HTTP error {response.status_code} for {url}",
                key=self.fetcher_key,
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise InvalidDataFormatError(
                f"Response from {url} is not valid JSON: {e}",
                key=self.fetcher_key,
            ) from e

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(key={self.fetcher_key})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(fetcher_key={self.fetcher_key!r}, "
            f"base_url={self.base_url!r}, transform={self.transform!r})"
        )


class FetcherConfig(BaseModel):
    """
    Declares one entity endpoint; calling it builds the fetcher.
    """

    collection: str = Field(..., description="Top-level array field of the payload")
    entity: Type[BaseEntity] = Field(..., description="Record model")
    base_url: Optional[str] = Field(
        None, description="Endpoint path segment; defaults to the registry key"
    )

    def __call__(
        self,
        key: str,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> DataFetcher:
        return DataFetcher(
            fetcher_key=key,
            transform=EnvelopeTransform(self.collection, self.entity),
            base_url=self.base_url,
            settings=settings,
            client=client,
        )
