import json

import pytest

from kiro_token_app import cli
from kiro_token_library.types import (
    CanonicalTokenRecord,
    ClientSecretArtifact,
    ProcessResult,
    UsageSnapshot,
)


def _result() -> ProcessResult:
    return ProcessResult(
        usage=UsageSnapshot(limit=50, used=5, remaining=45, email="dev@example.com"),
        kiro_token=CanonicalTokenRecord(
            access_token="AT1",
            refresh_token="rt-1",
            auth_method="builderid",
            provider="BuilderId",
            expires_at="2026-01-01T01:00:00.000Z",
            client_id="cid",
            client_secret="secret",
        ),
        is_builder_id_type=True,
        client_id_hash_file=ClientSecretArtifact(
            filename="abc.json", client_id="cid", client_secret="secret", region="us-east-1"
        ),
    )


def test_raw_output_is_the_result_json(tmp_path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    seen = []

    async def fake_run(text):
        seen.append(text)
        return _result()

    monkeypatch.setattr(cli, "_run", fake_run)
    source = tmp_path / "pasted.txt"
    source.write_text('{"refreshToken": "rt-1"}', encoding="utf-8")

    exit_code = cli.main([str(source), "--raw"])

    assert exit_code == 0
    assert seen == ['{"refreshToken": "rt-1"}']
    payload = json.loads(capsys.readouterr().out)
    assert payload["kiroToken"]["accessToken"] == "AT1"
    assert payload["clientIdHashFile"]["filename"] == "abc.json"


def test_rich_output_mentions_files(tmp_path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    async def fake_run(text):
        return _result()

    monkeypatch.setattr(cli, "_run", fake_run)
    source = tmp_path / "pasted.txt"
    source.write_text("anything", encoding="utf-8")

    assert cli.main([str(source)]) == 0

    out = capsys.readouterr().out
    assert "kiro-auth-token.json" in out
    assert "abc.json" in out


def test_unrecognized_input_exits_with_error(tmp_path) -> None:
    source = tmp_path / "pasted.txt"
    source.write_text("definitely not a token", encoding="utf-8")

    assert cli.main([str(source)]) == 1
