import pytest

from audit_gate.core.domain.exceptions import ExclusionConfigError
from audit_gate.core.domain.exclusions import is_valid_exclusion, parse_exclusions


def test_parse_numeric_and_ghsa():
    exclusions = parse_exclusions("3,8, 28 ,GHSA-ww39-953v-wcq6")

    assert exclusions == frozenset({"3", "8", "28", "GHSA-ww39-953v-wcq6"})


def test_parse_normalises_leading_zeros():
    assert parse_exclusions("0042") == frozenset({"42"})


def test_parse_ignores_empty_tokens():
    assert parse_exclusions(" ,, 1,\n2 ") == frozenset({"1", "2"})


def test_parse_empty_string():
    assert parse_exclusions("") == frozenset()


def test_parse_rejects_garbage():
    with pytest.raises(ExclusionConfigError) as exc_info:
        parse_exclusions("1,abc", source=".iyarc")

    assert exc_info.value.token == "abc"
    assert ".iyarc" in str(exc_info.value)


@pytest.mark.parametrize(
    "token, valid",
    [
        ("1469", True),
        ("GHSA-ww39-953v-wcq6", True),
        ("GHSA-WW39-953V-WCQ6", False),
        ("GHSA-ww39-953v", False),
        ("CVE-2021-1234", False),
        ("-1", False),
    ],
)
def test_is_valid_exclusion(token, valid):
    assert is_valid_exclusion(token) is valid
