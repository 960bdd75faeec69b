import pytest

from nhxedit.exceptions import SearchPatternError
from nhxedit.metadata import extract_field, nhx_fields, split_token


def test_extract_bootstrap():
    assert extract_field("[&&NHX:S=human:B=100]") == "100"
    assert extract_field("[&&NHX:B=87]") == "87"


def test_extract_missing_field():
    assert extract_field("[&&NHX:S=human]") is None
    assert extract_field("") is None
    assert extract_field("[x=1]", "") is None


def test_extract_custom_pattern():
    assert extract_field("[&&NHX:S=human:B=100]", r"S=(\w+)") == "human"
    assert extract_field("[&&NHX:S=human]", r"S=\w+") is None


def test_extract_bad_pattern():
    with pytest.raises(SearchPatternError):
        extract_field("[&&NHX:S=human]", "S=(")


def test_nhx_fields():
    assert nhx_fields("[&&NHX:S=human:B=100]") == {"S": "human", "B": "100"}


def test_generic_fields():
    assert nhx_fields("[&rate=0.5,flag]") == {"rate": "0.5", "flag": ""}


def test_split_token():
    assert split_token(" key = a=b ") == ("key", "a=b")
    assert split_token("bare") == ("bare", "")
