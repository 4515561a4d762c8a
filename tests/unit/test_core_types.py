import pytest

from ocean_client.core.exceptions import RateLimitedError
from ocean_client.core.types import PerformableRequest, Response, find_header
from ocean_client.ratelimit.deadline import Ratelimited

pytestmark = pytest.mark.unit


def test_response_round_trips_through_parts():
    response = Response(status_code=200, headers={"X-Trace": "1"}, body=[1, 2])

    rebuilt = Response.from_parts(response.head, response.body)

    assert rebuilt == response


def test_response_headers_are_read_only():
    response = Response(status_code=200, headers={"A": "1"}, body=None)

    with pytest.raises(TypeError):
        response.headers["A"] = "2"  # type: ignore[index]


def test_find_header_ignores_case():
    assert find_header({"RateLimit-Reset": "10"}, "ratelimit-reset") == "10"
    assert find_header({}, "RateLimit-Reset") is None


def test_scripted_request_satisfies_protocol(scripted):
    assert isinstance(scripted(), PerformableRequest)


def test_rate_limited_error_message_names_origin():
    cached = RateLimitedError(Ratelimited(until=0.0, cached=True))
    live = RateLimitedError(Ratelimited(until=0.0, cached=False))

    assert "predicted" in str(cached)
    assert "rejected by server" in str(live)
    assert "epoch 0" in str(live)
    assert live.until == 0.0


def test_response_declares_its_own_body_parameter():
    assert [p.__name__ for p in Response.__type_params__] == ["T"]
    assert Response[int].__origin__ is Response
