import tomllib

from ghclone.config import Config, default_config_path, parse_config


def test_default_config_path_uses_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_config_path() == tmp_path / ".config" / "ghclone.toml"


def test_write_then_parse_round_trip(tmp_path):
    path = tmp_path / "nested" / "ghclone.toml"
    config = Config(github_access_token="token", default_username="someone")
    config.write(path)
    assert parse_config(path) == config


def test_write_uses_field_names_as_keys(tmp_path):
    path = tmp_path / "ghclone.toml"
    Config(github_access_token="token", default_username="someone").write(path)
    with path.open("rb") as handle:
        document = tomllib.load(handle)
    assert document == {"GithubAccessToken": "token", "DefaultUsername": "someone"}


def test_write_to_default_location(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    Config(default_username="someone").write()
    assert parse_config() == Config(default_username="someone")


def test_missing_file_gives_default(tmp_path):
    assert parse_config(tmp_path / "absent.toml") == Config()


def test_invalid_toml_gives_default(tmp_path):
    path = tmp_path / "ghclone.toml"
    path.write_text("this is = = not toml", encoding="utf-8")
    assert parse_config(path) == Config()


def test_keys_match_case_insensitively(tmp_path):
    path = tmp_path / "ghclone.toml"
    path.write_text('defaultusername = "someone"\n', encoding="utf-8")
    assert parse_config(path) == Config(default_username="someone")


def test_wrong_value_type_gives_default(tmp_path):
    path = tmp_path / "ghclone.toml"
    path.write_text("DefaultUsername = 5\n", encoding="utf-8")
    assert parse_config(path) == Config()