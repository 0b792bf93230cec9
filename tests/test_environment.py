import pytest

from tfrunner.environment import (
    clean_env,
    env_map,
    env_slice,
    merge_user_agent,
    prohibited_env,
)


@pytest.mark.parametrize(
    "expected, uas",
    [
        ("foo/1 bar/2", ["foo/1", "bar/2"]),
        ("foo/1 bar/2", ["foo/1 bar/2"]),
        ("foo/1 bar/2", ["", "foo/1", "bar/2"]),
        ("foo/1 bar/2", ["", "foo/1 bar/2"]),
        ("foo/1 bar/2", ["  ", "foo/1 bar/2"]),
        ("foo/1 bar/2", ["foo/1", "", "bar/2"]),
        ("foo/1 bar/2", ["foo/1", "   ", "bar/2"]),
        ("foo/1 (bar/1 bar/2 bar/3) bar/2", ["foo/1 (bar/1 bar/2 bar/3)", "bar/2"]),
    ],
)
def test_merge_user_agent(expected, uas):
    assert merge_user_agent(*uas) == expected


def test_merge_user_agent_drops_duplicates():
    assert merge_user_agent("a/1", " a/1 ", "b/2") == "a/1 b/2"


def test_merge_user_agent_empty():
    assert merge_user_agent() == ""


def test_prohibited_env_finds_names_and_prefixes():
    env = {
        "TF_LOG": "trace",
        "TF_VAR_foo": "1",
        "TF_CLI_ARGS_plan": "-x",
        "TF_WORKSPACE": "dev",
        "HOME": "/home/user",
    }
    assert sorted(prohibited_env(env)) == [
        "TF_CLI_ARGS_plan",
        "TF_LOG",
        "TF_VAR_foo",
        "TF_WORKSPACE",
    ]


def test_prohibited_env_empty_when_clean():
    assert prohibited_env({"HOME": "/home/user", "PATH": "/bin"}) == []


def test_clean_env_removes_in_place():
    env = {"TF_LOG": "trace", "TF_VAR_x": "1", "HOME": "/home/user"}
    result = clean_env(env)
    assert result is env
    assert env == {"HOME": "/home/user"}
    assert prohibited_env(result) == []


def test_env_map_splits_on_first_equals():
    assert env_map(["A=1", "B=x=y", "C"]) == {"A": "1", "B": "x=y", "C": ""}


def test_env_map_last_value_wins():
    assert env_map(["A=1", "A=2"]) == {"A": "2"}


def test_env_slice_round_trip():
    env = {"CHECKPOINT_DISABLE": "", "TF_IN_AUTOMATION": "1", "X": "a=b"}
    assert env_map(env_slice(env)) == env
    assert len(env_slice(env)) == len(env)
    assert "TF_IN_AUTOMATION=1" in env_slice(env)