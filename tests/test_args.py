import pytest

from ghclone.args import RootArgs, parse_root_args
from ghclone.config import Config
from ghclone.output import FatalError


def test_positional_name_wins_over_default():
    args = parse_root_args(["alice"], Config(default_username="bob"))
    assert args.name == "alice"


def test_default_username_used_without_positional():
    args = parse_root_args([], Config(default_username="bob"))
    assert args.name == "bob"


def test_flags_are_carried_over():
    args = parse_root_args(
        ["alice"], Config(), directory="/tmp/out", latest=True, ssh=True
    )
    assert args == RootArgs(
        name="alice", directory="/tmp/out", latest=True, ssh=True, choose=False
    )


def test_no_name_and_no_default_is_fatal():
    with pytest.raises(FatalError, match="Pass username or specify default username"):
        parse_root_args([], Config())


def test_too_many_names_is_fatal():
    with pytest.raises(FatalError, match="You can pass only 0 or 1 arguments!"):
        parse_root_args(["a", "b"], Config(default_username="bob"))


def test_validate_rejects_latest_and_choose():
    with pytest.raises(FatalError, match="Pass --latest or --choose flag, not both!"):
        RootArgs(name="alice", latest=True, choose=True).validate()


@pytest.mark.parametrize("latest, choose", [(True, False), (False, True), (False, False)])
def test_validate_accepts_single_flag(latest, choose):
    args = RootArgs(name="alice", latest=latest, choose=choose)
    args.validate()
    assert (args.latest, args.choose) == (latest, choose)