import json

import pytest

from planswitch.core.errors import ConfigurationError
from planswitch.credentials import load_session


@pytest.fixture
def global_dir(tmp_path):
    (tmp_path / "auth.json").write_text(
        json.dumps({"credentials": [{"provider": "gh", "token": "other"}, {"provider": "sh", "token": "stored"}]})
    )
    (tmp_path / "config.json").write_text(
        json.dumps(
            {
                "sh": {
                    "currentTeam": {"id": "team_abc", "slug": "acme"},
                    "user": {"username": "jdoe", "email": "jdoe@example.com"},
                }
            }
        )
    )
    return tmp_path


class TestLoadSession:
    """Tests for credential and scope resolution."""

    def test_stored_token_and_team(self, global_dir):
        session = load_session(global_dir)
        assert session.token == "stored"
        assert session.team_id == "team_abc"
        assert session.display_name == "acme"

    def test_flag_token_wins(self, global_dir):
        assert load_session(global_dir, token="flag").token == "flag"

    def test_team_flag_by_slug(self, global_dir):
        session = load_session(global_dir, team="acme")
        assert session.team_id == "team_abc"
        assert session.team_slug == "acme"

    def test_team_flag_other_team(self, global_dir):
        session = load_session(global_dir, team="other")
        assert session.team_id == "other"

    def test_local_scope(self, global_dir, tmp_path):
        local = tmp_path / "now.json"
        local.write_text(json.dumps({"scope": "jdoe"}))
        session = load_session(global_dir, local_config=local)
        assert session.team_id is None
        assert session.display_name == "jdoe"

    def test_missing_local_config(self, global_dir, tmp_path):
        with pytest.raises(ConfigurationError):
            load_session(global_dir, local_config=tmp_path / "missing.json")

    def test_invalid_json(self, global_dir):
        (global_dir / "auth.json").write_text("{not json")
        with pytest.raises(ConfigurationError):
            load_session(global_dir)

    def test_no_token(self, tmp_path, monkeypatch):
        monkeypatch.setattr("planswitch.credentials.ENV_TOKEN", "")
        with pytest.raises(ConfigurationError):
            load_session(tmp_path)

    def test_env_token_fallback(self, tmp_path, monkeypatch):
        monkeypatch.setattr("planswitch.credentials.ENV_TOKEN", "from-env")
        session = load_session(tmp_path)
        assert session.token == "from-env"
        assert session.display_name == "your account"

    @pytest.mark.parametrize("sh", [["not", "an", "object"], "text", {"user": "jdoe"}])
    def test_malformed_global_config(self, global_dir, sh):
        (global_dir / "config.json").write_text(json.dumps({"sh": sh}))
        with pytest.raises(ConfigurationError):
            load_session(global_dir)
