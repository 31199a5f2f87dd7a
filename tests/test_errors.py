"""Tests for newsrelay.errors."""

import pytest

from newsrelay.errors import CacheError, CommsError, ErrorKind


class TestCommsError:
    def test_local_code(self) -> None:
        error = CommsError.local("boom")

        assert error.code == -1
        assert error.kind is ErrorKind.LOCAL
        assert str(error) == "Communications Error -1 | boom"

    @pytest.mark.parametrize("code", [400, 404, 500, 599])
    def test_transport_codes(self, code) -> None:
        assert CommsError(code, "remote").kind is ErrorKind.TRANSPORT

    @pytest.mark.parametrize("code", [0, 200, 302, 399, 600, -2])
    def test_rejects_codes_outside_taxonomy(self, code) -> None:
        with pytest.raises(ValueError):
            CommsError(code, "nope")


class TestCacheError:
    def test_critical_message(self) -> None:
        assert str(CacheError("down", critical=True)) == "CRITICAL Database Error | down"

    def test_plain_message(self) -> None:
        assert str(CacheError("slow")) == "Database Error | slow"
