"""
Bloglist Backend — Authorization Header Parsing Tests
======================================================
"""

import pytest

from bloglist.exceptions import UnauthorizedError
from bloglist.middleware.auth import extract_bearer_token


class TestExtractBearerToken:

    def test_bearer_token(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer_token("bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header(self, header):
        with pytest.raises(UnauthorizedError, match="token missing"):
            extract_bearer_token(header)

    @pytest.mark.parametrize("header", ["Basic cm9vdDpzZWtyZXQ=", "Bearer", "abc.def.ghi"])
    def test_other_schemes(self, header):
        with pytest.raises(UnauthorizedError) as exc_info:
            extract_bearer_token(header)
        assert exc_info.value.message == "token missing or invalid"
