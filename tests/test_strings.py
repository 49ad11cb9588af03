import string

import pytest

from nstdkit.strings import (
    compare,
    compare_ignore_case,
    ends_with,
    equals_ignore_case,
    find,
    find_last,
    find_last_of,
    find_one_of,
    from_bool,
    is_space,
    join,
    starts_with,
    string_hash,
    substr,
    to_bool,
    to_lower_case,
    to_upper_case,
    trim,
)

TEST_TEXT = "this is the find test test string"


def test_compare():
    assert compare("123", "123") == 0
    assert compare("123", "xxx") != 0
    assert compare("1234", "123", 3) == 0
    assert compare("1234", "xxx", 3) != 0
    assert compare("123", "1234", 3) == 0
    assert compare("xxx", "1234", 3) != 0


def test_compare_sign():
    assert compare("abc", "abd") < 0
    assert compare("abd", "abc") > 0
    assert compare("ab", "abc") < 0
    assert compare("abc", "ab") > 0


def test_compare_ignore_case():
    assert compare_ignore_case("abc", "ABC") == 0
    assert compare_ignore_case("abc", "xxx") != 0
    assert compare_ignore_case("abcd", "ABC", 3) == 0
    assert compare_ignore_case("abcd", "xxx", 3) != 0
    assert compare_ignore_case("abc", "ABCD", 3) == 0
    assert compare_ignore_case("xxx", "ABCD", 3) != 0


def test_equals_ignore_case():
    assert equals_ignore_case("Hello", "hELLO")
    assert not equals_ignore_case("Hello", "hELLO!")
    assert not equals_ignore_case("abc", "abd")


@pytest.mark.parametrize("code", range(256))
def test_case_mapping_and_space_match_c_locale(code):
    c = chr(code)
    assert to_upper_case(c) == chr(bytes([code]).upper()[0])
    assert to_lower_case(c) == chr(bytes([code]).lower()[0])
    assert is_space(c) == (c in string.whitespace)


def test_find_methods():
    assert find(TEST_TEXT, "z") is None
    assert find(TEST_TEXT, "zz") is None
    assert TEST_TEXT[find(TEST_TEXT, "i"):] == "is is the find test test string"
    assert TEST_TEXT[find_last(TEST_TEXT, "i"):] == "ing"
    assert TEST_TEXT[find(TEST_TEXT, "is"):] == "is is the find test test string"
    assert TEST_TEXT[find_last(TEST_TEXT, "is"):] == "is the find test test string"
    assert TEST_TEXT[find_one_of(TEST_TEXT, "ex"):] == "e find test test string"
    assert TEST_TEXT[find_one_of(TEST_TEXT, "xe"):] == "e find test test string"
    assert TEST_TEXT[find_last_of(TEST_TEXT, "ex"):] == "est string"
    assert TEST_TEXT[find_last_of(TEST_TEXT, "xe"):] == "est string"


def test_find_of_missing_chars():
    assert find_one_of(TEST_TEXT, "qz") is None
    assert find_last_of(TEST_TEXT, "qz") is None


@pytest.mark.parametrize(
    "start, length, expected",
    [
        (0, -1, "hello"),
        (1, 3, "ell"),
        (-3, -1, "llo"),
        (-10, 2, "he"),
        (10, 2, ""),
        (3, 10, "lo"),
    ],
)
def test_substr(start, length, expected):
    assert substr("hello", start, length) == expected


def test_starts_and_ends_with():
    assert starts_with("hello", "he")
    assert not starts_with("hello", "lo")
    assert ends_with("hello", "lo")
    assert not ends_with("lo", "hello")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", ""),
        ("\t \n\t \n", ""),
        ("\t \nx\t \n", "x"),
        ("x\t \n", "x"),
        ("\t \nx", "x"),
        ("x", "x"),
    ],
)
def test_trim(text, expected):
    assert trim(text) == expected


def test_trim_custom_chars():
    assert trim("--x--", "-") == "x"


@pytest.mark.parametrize(
    "text",
    ["", "0", "false", "False", "falSe", "0.0", ".0", "0.", ".00", "00.", "00.00", "0.00", "00.0"],
)
def test_to_bool_false(text):
    assert to_bool(text) is False


@pytest.mark.parametrize("text", [".", "dasdas", "true"])
def test_to_bool_true(text):
    assert to_bool(text) is True


def test_from_bool():
    assert from_bool(True) == "true"
    assert from_bool(False) == "false"


def test_join():
    assert join([], ".") == ""
    assert join(["a", "b", "c"], ".") == "a.b.c"


def test_string_hash_empty_is_zero():
    assert string_hash("") == 0


def test_string_hash_invariants():
    assert string_hash("hello") == string_hash("hel" + "lo")
    assert 0 <= string_hash("some longer text here") < 2 ** 64
    # only length, first, middle and last character contribute
    assert string_hash("abcde") == string_hash("aXcYe")
    assert string_hash("abc") != string_hash("abd")