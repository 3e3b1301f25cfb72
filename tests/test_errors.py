"""Tests for tern.errors — exception hierarchy and error messages."""

import pytest

from tern.errors import (
    ConfigurationError,
    DuplicateParam,
    DuplicateRoute,
    HistoryError,
    MalformedTemplate,
    MultipleRedirectError,
    ResolveError,
    RouteNotFound,
    RouterNotRunning,
    TernError,
)
from tern.routing.pointer import Pointer


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [
            ConfigurationError,
            HistoryError,
            MultipleRedirectError,
            ResolveError,
            RouteNotFound,
            RouterNotRunning,
        ],
    )
    def test_is_tern_error(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, TernError)

    @pytest.mark.parametrize("exc_type", [MalformedTemplate, DuplicateParam, DuplicateRoute])
    def test_authoring_errors_are_configuration_errors(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, ConfigurationError)

    def test_route_not_found_is_lookup_error(self) -> None:
        assert issubclass(RouteNotFound, LookupError)

    def test_router_not_running_is_runtime_error(self) -> None:
        assert issubclass(RouterNotRunning, RuntimeError)


class TestMessages:
    def test_malformed_template(self) -> None:
        err = MalformedTemplate("/users/{id", 10, "Expected '}' but got end of template")
        assert str(err) == "Expected '}' but got end of template at offset 10: /users/{id"
        assert err.offset == 10

    def test_duplicate_param(self) -> None:
        err = DuplicateParam("/a/{id}/{id}", "id")
        assert "'id'" in str(err)
        assert "/a/{id}/{id}" in str(err)

    def test_duplicate_route(self) -> None:
        assert "'home'" in str(DuplicateRoute("home"))

    def test_resolve_error_copies_params(self) -> None:
        params = {"id": "x"}
        err = ResolveError("post", params)
        params["id"] = "y"
        assert err.params == {"id": "x"}
        assert "'post'" in str(err)

    def test_multiple_redirect(self) -> None:
        assert "once" in str(MultipleRedirectError("index"))

    def test_pointer_raises_route_not_found(self) -> None:
        with pytest.raises(RouteNotFound, match="/nope"):
            Pointer().get_or_fail("/nope")
