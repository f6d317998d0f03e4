import check_auth_config


COMPLETE = {
    "auth": {
        "redirect_uri": "http://localhost:8501/oauth2callback",
        "cookie_secret": "s3cret",
        "google": {
            "client_id": "id",
            "client_secret": "secret",
            "server_metadata_url": "https://accounts.google.com/.well-known/openid-configuration",
        },
    }
}


def test_complete_config_has_no_problems():
    assert check_auth_config.find_auth_config_problems(COMPLETE) == []


def test_missing_file():
    assert check_auth_config.find_auth_config_problems(None) == [".streamlit/secrets.toml not found"]


def test_missing_auth_section():
    assert check_auth_config.find_auth_config_problems({}) == ["missing [auth] section"]


def test_missing_provider_and_keys():
    problems = check_auth_config.find_auth_config_problems({"auth": {"redirect_uri": "x"}}, provider="github")
    assert problems == ["[auth] is missing 'cookie_secret'", "missing [auth.github] section"]


def test_missing_provider_keys():
    config = {"auth": {"redirect_uri": "x", "cookie_secret": "y", "google": {"client_id": "id"}}}
    problems = check_auth_config.find_auth_config_problems(config)
    assert "[auth.google] is missing 'client_secret'" in problems
    assert "[auth.google] is missing 'server_metadata_url'" in problems


def test_load_secrets_from_file(tmp_path):
    path = tmp_path / "secrets.toml"
    path.write_text('[auth]\nredirect_uri = "x"\n')

    assert check_auth_config.load_secrets(str(path)) == {"auth": {"redirect_uri": "x"}}
    assert check_auth_config.load_secrets(str(tmp_path / "absent.toml")) is None


def test_resolve_provider_prefers_secrets(monkeypatch):
    monkeypatch.setenv("LOGIN_OAUTH_PROVIDER", "github")
    assert check_auth_config.resolve_provider({"LOGIN_OAUTH_PROVIDER": "microsoft"}) == "microsoft"
    assert check_auth_config.resolve_provider({}) == "github"
    assert check_auth_config.resolve_provider(None) == "github"


def test_resolve_provider_default(monkeypatch):
    monkeypatch.delenv("LOGIN_OAUTH_PROVIDER", raising=False)
    assert check_auth_config.resolve_provider({}) == "google"


def test_main_checks_provider_from_secrets(monkeypatch, capsys):
    monkeypatch.setenv("LOGIN_OAUTH_PROVIDER", "google")
    secrets = dict(COMPLETE, LOGIN_OAUTH_PROVIDER="github")
    monkeypatch.setattr(check_auth_config, "load_secrets", lambda: secrets)

    assert check_auth_config.main() == 1
    assert "missing [auth.github] section" in capsys.readouterr().out
