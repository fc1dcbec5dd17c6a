"""Unit tests for fetch_validated: every failure mode folds into None."""

from __future__ import annotations

import httpx
import pytest
from pydantic import BaseModel

from listening_to.utils.http import fetch_validated


class _Item(BaseModel):
    name: str
    count: int = 0


class TestFetchValidated:
    @pytest.mark.asyncio
    async def test_returns_validated_model(self, client_for) -> None:
        client = client_for(lambda r: httpx.Response(200, json={"name": "x", "count": 2}))

        result = await fetch_validated(client, "https://api.test/item", _Item)

        assert result == _Item(name="x", count=2)

    @pytest.mark.asyncio
    async def test_validates_generic_shapes(self, client_for) -> None:
        client = client_for(lambda r: httpx.Response(200, json=[{"name": "a"}, {"name": "b"}]))

        result = await fetch_validated(client, "https://api.test/items", list[_Item])

        assert [item.name for item in result] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_passes_query_params(self, client_for) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"name": "x"})

        await fetch_validated(
            client_for(handler), "https://api.test/item", _Item, {"q": "a b", "format": "json"}
        )

        assert seen[0].url.params["q"] == "a b"
        assert seen[0].url.params["format"] == "json"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [301, 400, 404, 429, 500, 503])
    async def test_non_2xx_returns_none(self, client_for, status: int) -> None:
        client = client_for(lambda r: httpx.Response(status, json={"name": "x"}))
        assert await fetch_validated(client, "https://api.test/item", _Item) is None

    @pytest.mark.asyncio
    async def test_transport_error_returns_none(self, client_for) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        assert await fetch_validated(client_for(handler), "https://api.test/item", _Item) is None

    @pytest.mark.asyncio
    async def test_invalid_json_returns_none(self, client_for) -> None:
        client = client_for(lambda r: httpx.Response(200, text="<html>not json</html>"))
        assert await fetch_validated(client, "https://api.test/item", _Item) is None

    @pytest.mark.asyncio
    async def test_schema_mismatch_returns_none(self, client_for) -> None:
        client = client_for(lambda r: httpx.Response(200, json={"count": "many"}))
        assert await fetch_validated(client, "https://api.test/item", _Item) is None
