"""
Tests for the command-line entry point.

Run with: pytest tests/
"""

import json

import pytest
from review_tool.main import load_request_from_file, main
from review_tool.models import ValidationError


def _write_request(tmp_path, data):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(data))
    return str(path)


VALID_REQUEST = {
    "target": "staged",
    "taskDescription": "fix bug",
    "llmProvider": "openai",
    "modelName": "o4-mini",
}


def test_load_request_from_file(tmp_path):
    """Should load and validate a JSON request."""
    request = load_request_from_file(_write_request(tmp_path, VALID_REQUEST))
    assert request.model_name == "o4-mini"


def test_load_invalid_request_from_file(tmp_path):
    """Should raise ValidationError for an invalid request."""
    with pytest.raises(ValidationError):
        load_request_from_file(_write_request(tmp_path, {"target": "staged"}))


def test_main_valid_request(clean_env, tmp_path, capsys):
    """Valid request prints a summary and exits 0."""
    clean_env.setenv("OPENAI_API_KEY", "sk-openai")
    code = main(["--request-file", _write_request(tmp_path, VALID_REQUEST)])
    out = capsys.readouterr().out
    assert code == 0
    assert "openai/o4-mini" in out
    assert "API Key: found" in out
    assert "Max Tokens: 32000" in out
    assert "sk-openai" not in out


def test_main_missing_api_key(clean_env, tmp_path, capsys):
    """A missing key is reported but not fatal."""
    code = main(["--request-file", _write_request(tmp_path, VALID_REQUEST)])
    assert code == 0
    assert "API Key: MISSING" in capsys.readouterr().out


def test_main_invalid_request(clean_env, tmp_path, capsys):
    """Every invalid field is printed to stderr."""
    code = main(["--request-file", _write_request(tmp_path, {"target": "nope"})])
    err = capsys.readouterr().err
    assert code == 1
    for field in ("target", "taskDescription", "llmProvider", "modelName"):
        assert field in err


def test_main_branch_diff_without_base_warns(clean_env, tmp_path, caplog):
    """branch_diff without diffBase is accepted with a warning."""
    data = dict(VALID_REQUEST, target="branch_diff")
    assert main(["--request-file", _write_request(tmp_path, data)]) == 0
    assert "without diffBase" in caplog.text


def test_main_file_not_found(clean_env, tmp_path, capsys):
    """Missing request file exits 1."""
    assert main(["--request-file", str(tmp_path / "missing.json")]) == 1
    assert "not found" in capsys.readouterr().err


def test_main_invalid_json(clean_env, tmp_path, capsys):
    """Malformed JSON exits 1."""
    path = tmp_path / "request.json"
    path.write_text("{not json")
    assert main(["--request-file", str(path)]) == 1
    assert "not valid JSON" in capsys.readouterr().err


def test_main_invalid_log_level(clean_env, tmp_path, capsys):
    """A bad LOG_LEVEL is reported instead of crashing."""
    clean_env.setenv("LOG_LEVEL", "DEBUG")
    assert main(["--request-file", _write_request(tmp_path, VALID_REQUEST)]) == 1
    assert "LOG_LEVEL" in capsys.readouterr().err


def test_main_schema(capsys):
    """--schema prints the request JSON schema."""
    assert main(["--schema"]) == 0
    schema = json.loads(capsys.readouterr().out)
    assert "taskDescription" in schema["properties"]
