import json

from urlsummarizer.logging import JsonLogger


def test_emits_one_json_line_with_fields(capsys):
    log = JsonLogger("info")
    log.info("fetch.done", url="https://example.com", status=200)

    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["event"] == "fetch.done"
    assert rec["level"] == "INFO"
    assert rec["url"] == "https://example.com"
    assert rec["status"] == 200


def test_redacts_secret_fields(capsys):
    log = JsonLogger("info")
    log.info("setup.completed", config={"openai_api_key": "sk-live", "model": "gpt-3.5-turbo"})

    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["config"] == {"openai_api_key": "[REDACTED]", "model": "gpt-3.5-turbo"}


def test_respects_level(capsys):
    log = JsonLogger("warn")
    log.info("quiet")
    log.error("loud", error=ValueError("boom"))

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    rec = json.loads(lines[0])
    assert rec["event"] == "loud"
    assert rec["error"] == {"type": "ValueError", "message": "boom"}


def test_can_write_to_stderr(capsys):
    log = JsonLogger("info", use_stderr=True)
    log.warning("fetch.timeout")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err)["level"] == "WARN"


def test_exports_only_public_names():
    from urlsummarizer import logging as log_module

    assert log_module.__all__ == ["logger", "JsonLogger"]
