import pytest

from ocean_client.ratelimit.policy import RatelimitPolicy

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("respect_blocking", RatelimitPolicy.RESPECT_BLOCKING),
        ("RESPECT_NONBLOCKING", RatelimitPolicy.RESPECT_NONBLOCKING),
        ("ignore", RatelimitPolicy.IGNORE),
        ("block", RatelimitPolicy.RESPECT_BLOCKING),
        ("fail-fast", RatelimitPolicy.RESPECT_NONBLOCKING),
        (RatelimitPolicy.IGNORE, RatelimitPolicy.IGNORE),
    ],
)
def test_parse_accepts_values_names_and_aliases(raw, expected):
    assert RatelimitPolicy.parse(raw) is expected


def test_parse_rejects_unknown_policy():
    with pytest.raises(ValueError, match="Invalid rate limit policy"):
        RatelimitPolicy.parse("sometimes")

