"""Tests for the shared exporter base class."""

import pytest

from tfexport.exporters.base import BaseExporter
from tfexport.utils.exceptions import APIError, FetchError, ResourceNotFoundError


class NamesOnly(BaseExporter):
    family = "dns"

    async def fetch(self, name: str) -> dict:
        return {"name": name}


def test_fetch_must_be_implemented(mock_client, tmp_path):
    with pytest.raises(TypeError, match="fetch"):
        BaseExporter(mock_client, tmp_path)


def test_subclass_with_fetch_can_be_created(mock_client, tmp_path):
    exporter = NamesOnly(mock_client, tmp_path, section="dns")

    assert exporter.work_path == tmp_path
    assert exporter.section == "dns"


class TestGuard:
    @pytest.mark.asyncio
    async def test_api_error_becomes_fetch_error(self, mock_client, tmp_path):
        cause = APIError("API Error 500: down", status_code=500)
        mock_client.get_zone.side_effect = cause
        exporter = NamesOnly(mock_client, tmp_path)

        with pytest.raises(FetchError) as exc_info:
            await exporter.guard("fetching zone", lambda: mock_client.get_zone("a.com"))

        assert exc_info.value.phase == "fetching zone"
        assert exc_info.value.cause is cause

    @pytest.mark.asyncio
    async def test_not_found_passes_through(self, mock_client, tmp_path):
        mock_client.get_zone.side_effect = ResourceNotFoundError("zone", "a.com")
        exporter = NamesOnly(mock_client, tmp_path)

        with pytest.raises(ResourceNotFoundError):
            await exporter.guard("fetching zone", lambda: mock_client.get_zone("a.com"))
