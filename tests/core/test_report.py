from hivecheck.envfile import EnvLoadResult
from hivecheck.registry import load_registry
from hivecheck.types import CheckResult, CheckStatus, ResultSet


def _results():
    rs = ResultSet()
    rs.add(CheckResult.working("auto", "built-in", kind="builtin"))
    rs.add(
        CheckResult.problem(
            CheckStatus.WORKING_WITH_CAVEAT, "tool-missing", "openai/gpt-4o",
            "aider not installed", provider="openai",
            credential_name="OPENAI_API_KEY",
        )
    )
    rs.add(
        CheckResult.problem(
            CheckStatus.FAILED, "credential-invalid", "groq/llama-3.1-8b-instant",
            "Credential GROQ_API_KEY invalid or too short for groq",
            provider="groq", credential_name="GROQ_API_KEY",
        )
    )
    rs.add(
        CheckResult.problem(
            CheckStatus.SKIPPED, "credential-missing", "xai/grok-4-latest",
            "Credential not configured (XAI_API_KEY)", provider="xai",
            credential_name="XAI_API_KEY",
        )
    )
    return rs


def test_result_set_buckets():
    rs = _results()
    assert len(rs.working) == 2
    assert len(rs.caveats) == 1
    assert len(rs.failed) == 1
    assert len(rs.skipped) == 1
    assert len(rs) == 4


def test_summary_counts_and_lists(quiet_reporter):
    quiet_reporter.summary(_results(), load_registry())
    text = quiet_reporter.text()
    assert "Working: 2 models (1 with warnings)" in text
    assert "Failed: 1 models" in text
    assert "Skipped: 1 models" in text
    assert "cursor-agent: 4 models (built-in)" in text
    assert "aider: 32 models (external APIs)" in text
    assert "Total: 36 models available" in text
    assert "MODELS BY PROVIDER" in text
    assert "groq/llama-3.1-8b-instant (groq): Credential GROQ_API_KEY" in text
    assert "xai/grok-4-latest (xai): XAI_API_KEY" in text


def test_summary_omits_empty_lists(quiet_reporter):
    rs = ResultSet()
    rs.add(CheckResult.working("auto", "built-in", kind="builtin"))
    quiet_reporter.summary(rs, load_registry())
    text = quiet_reporter.text()
    assert "Failed models" not in text
    assert "Skipped models" not in text


def test_env_warning_and_error_output(quiet_reporter, tmp_path):
    quiet_reporter.env_loaded(EnvLoadResult(path=tmp_path / ".env",
                                            found=False))
    quiet_reporter.error("boom")
    assert "not found" in quiet_reporter.text()
    assert "env-example.txt" in quiet_reporter.text()
    assert "boom" in quiet_reporter.err_text()


def test_problem_rejects_unknown_reason():
    import pytest

    with pytest.raises(AssertionError):
        CheckResult.problem(CheckStatus.FAILED, "made-up", "m", "msg")
