import os
import sys

import toml

SECRETS_PATH = ".streamlit/secrets.toml"

REQUIRED_AUTH_KEYS = ("redirect_uri", "cookie_secret")
REQUIRED_PROVIDER_KEYS = ("client_id", "client_secret", "server_metadata_url")


def load_secrets(path=SECRETS_PATH):
    try:
        return toml.load(path)
    except FileNotFoundError:
        return None


def find_auth_config_problems(secrets, provider="google"):
    """Return a list of human-readable problems with the [auth] section."""
    if secrets is None:
        return [f"{SECRETS_PATH} not found"]

    auth_section = secrets.get("auth")
    if not isinstance(auth_section, dict):
        return ["missing [auth] section"]

    problems = [f"[auth] is missing '{key}'" for key in REQUIRED_AUTH_KEYS if not auth_section.get(key)]

    provider_section = auth_section.get(provider)
    if not isinstance(provider_section, dict):
        problems.append(f"missing [auth.{provider}] section")
        return problems

    problems.extend(
        f"[auth.{provider}] is missing '{key}'" for key in REQUIRED_PROVIDER_KEYS if not provider_section.get(key)
    )
    return problems


def resolve_provider(secrets):
    # Same lookup order as the app: secrets.toml, then the environment.
    from_secrets = (secrets or {}).get("LOGIN_OAUTH_PROVIDER")
    return from_secrets or os.getenv("LOGIN_OAUTH_PROVIDER") or "google"


def main():
    secrets = load_secrets()
    provider = resolve_provider(secrets)
    problems = find_auth_config_problems(secrets, provider)
    if problems:
        print(f"❌ Sign-in is not configured for '{provider}':")
        for problem in problems:
            print(f"  - {problem}")
        return 1
    print(f"✅ Sign-in configured for '{provider}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
