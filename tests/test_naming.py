import pytest

from lsdjkit.naming import compare_case_insensitive, construct_project_name, is_hidden_file


@pytest.mark.parametrize(
    "first, second, expected",
    [
        (".SAV", ".sav", True),
        ("LsdSng", "lsdsng", True),
        ("abc", "abd", False),
        ("", "", True),
        ("abc", "abcd", False),
    ],
)
def test_compare_case_insensitive(first, second, expected):
    assert compare_case_insensitive(first, second) is expected


def test_project_name_truncated_to_eight():
    result = construct_project_name("ABCDEFGHIJ")
    assert len(result) == 8
    assert "ABCDEFGHIJ".startswith(result)


def test_project_name_stops_at_nul():
    assert construct_project_name("AB\0CD", False) == "AB"


def test_project_name_from_bytes():
    assert construct_project_name(b"SONG\0\0\0\0") == "SONG"


def test_project_name_underscores():
    assert construct_project_name("xxAB", True) == "__AB"


def test_project_name_keeps_x_without_underscore():
    result = construct_project_name("AxBx", False)
    assert result == "AxBx"


def test_project_name_underscore_removes_all_x():
    result = construct_project_name("xAxBxCxD", True)
    assert "x" not in result
    assert len(result) == 8


@pytest.mark.parametrize(
    "name, expected",
    [
        ("", True),
        (".", False),
        ("a", False),
        (".hidden", True),
        ("..", False),
        ("./song.sav", False),
        ("song.sav", False),
    ],
)
def test_is_hidden_file(name, expected):
    assert is_hidden_file(name) is expected