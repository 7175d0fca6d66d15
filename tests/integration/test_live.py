from __future__ import annotations

import os

import pytest

from bibmesh import fetch
from bibmesh.providers import GVK, ZbMath

KNUTH_QUERY = "author:Knuth AND title:art"

requires_live = pytest.mark.skipif(
    not os.environ.get("BIBMESH_LIVE_TESTS"),
    reason="BIBMESH_LIVE_TESTS not set",
)


@requires_live
@pytest.mark.live
class TestLiveProviders:
    @pytest.mark.asyncio
    async def test_zbmath_returns_bibtex(self):
        body = await fetch(KNUTH_QUERY, ZbMath(), max_results=5)
        assert body is not None
        assert "Knuth" in body

    @pytest.mark.asyncio
    async def test_gvk_returns_sru_response(self):
        body = await fetch(KNUTH_QUERY, GVK(), max_results=5)
        assert body is not None
        assert "searchRetrieveResponse" in body
