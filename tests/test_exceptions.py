# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for exception classes."""

import pytest

from genro_static.exceptions import (
    ConfigError,
    HTTPException,
    HTTPMethodNotAllowed,
    HTTPNotFound,
)


class TestHTTPException:
    """Tests for HTTPException class."""

    def test_basic_creation(self) -> None:
        exc = HTTPException(404, detail="Not found")
        assert exc.status_code == 404
        assert exc.detail == "Not found"
        assert exc.headers is None

    def test_dict_headers_stored_as_list(self) -> None:
        exc = HTTPException(401, headers={"WWW-Authenticate": "Bearer"})
        assert exc.headers == [("WWW-Authenticate", "Bearer")]

    def test_list_headers_keep_duplicates(self) -> None:
        exc = HTTPException(400, headers=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        assert exc.headers == [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]

    def test_str_returns_detail(self) -> None:
        assert str(HTTPException(400, detail="Bad request")) == "Bad request"

    def test_repr(self) -> None:
        assert repr(HTTPException(404, "x")) == "HTTPException(status_code=404, detail='x')"

    def test_can_be_raised_and_caught(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            raise HTTPException(503, detail="Service unavailable")
        assert exc_info.value.status_code == 503


class TestSubclasses:
    """Tests for the concrete HTTP exceptions."""

    def test_not_found(self) -> None:
        exc = HTTPNotFound()
        assert exc.status_code == 404
        assert exc.detail == "Not found"
        assert isinstance(exc, HTTPException)

    def test_method_not_allowed_sets_allow_header(self) -> None:
        exc = HTTPMethodNotAllowed(("GET", "HEAD"))
        assert exc.status_code == 405
        assert exc.allowed == ("GET", "HEAD")
        assert exc.headers == [("Allow", "GET, HEAD")]

    def test_config_error_is_not_http(self) -> None:
        assert not issubclass(ConfigError, HTTPException)
