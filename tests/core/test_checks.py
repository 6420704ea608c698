import pytest

from hivecheck import metrics
from hivecheck.checks import check_builtin, check_external
from hivecheck.envfile import load_env_file
from hivecheck.registry import load_registry
from hivecheck.types import CheckStatus


@pytest.mark.parametrize("environ", [{}, {"OPENAI_API_KEY": "x"}])
def test_builtin_always_working(environ):
    reg = load_registry()
    for model_id in reg.builtin_models:
        res = check_builtin(model_id, reg)
        assert res.status is CheckStatus.WORKING
        assert res.kind == "builtin"
        assert "always available" in res.message


def test_unknown_external_model_fails(demo_registry, fake_probe):
    probe = fake_probe()
    res = check_external("demo/nope", demo_registry, {}, probe)
    assert res.status is CheckStatus.FAILED
    assert res.reason == "model-not-found"
    assert "not found" in res.message
    assert probe.calls == 0


def test_missing_credential_skips_without_probe(demo_registry, fake_probe):
    probe = fake_probe()
    res = check_external("demo/x", demo_registry, {"OTHER": "x" * 20}, probe)
    assert res.status is CheckStatus.SKIPPED
    assert res.reason == "credential-missing"
    assert res.credential_name == "DEMO_KEY"
    assert probe.calls == 0


def test_short_credential_fails_before_probe(demo_registry, fake_probe):
    probe = fake_probe()
    res = check_external("demo/x", demo_registry, {"DEMO_KEY": "123456789"},
                         probe)
    assert res.status is CheckStatus.FAILED
    assert res.reason == "credential-invalid"
    assert "invalid" in res.message
    assert probe.calls == 0


def test_credential_ok_tool_missing_is_caveat(demo_registry, fake_probe):
    probe = fake_probe(present=False)
    res = check_external("demo/x", demo_registry, {"DEMO_KEY": "1234567890"},
                         probe)
    assert res.status is CheckStatus.WORKING_WITH_CAVEAT
    assert res.is_working
    assert res.reason == "tool-missing"
    assert "aider not installed" in res.message
    assert probe.calls == 1


def test_probe_error_keeps_its_code(demo_registry, fake_probe):
    probe = fake_probe(present=False, error="probe-error")
    res = check_external("demo/x", demo_registry, {"DEMO_KEY": "k" * 32},
                         probe)
    assert res.status is CheckStatus.WORKING_WITH_CAVEAT
    assert res.reason == "probe-error"
    assert "not installed" in res.message


def test_all_checks_pass(demo_registry, fake_probe):
    probe = fake_probe(present=True)
    res = check_external("demo/x", demo_registry, {"DEMO_KEY": "k" * 32},
                         probe)
    assert res.status is CheckStatus.WORKING
    assert res.reason is None
    assert res.provider == "demo"
    assert "demo configured (x)" in res.message
    counters = metrics.snapshot()["counters"]
    assert counters["checks_total{status=working}"] == 1


def test_custom_min_credential_length(demo_registry, fake_probe):
    probe = fake_probe()
    res = check_external("demo/x", demo_registry, {"DEMO_KEY": "abcd"},
                         probe, min_credential_length=4)
    assert res.status is CheckStatus.WORKING


def test_env_file_moves_model_past_skip(tmp_path, fake_probe):
    from hivecheck.registry import ExternalModelEntry, ModelRegistry

    reg = ModelRegistry(
        external_models={
            "foo/model": ExternalModelEntry(
                provider="foo", credential_name="FOO", underlying_name="m"
            )
        }
    )
    environ = {}
    probe = fake_probe(present=False)
    before = check_external("foo/model", reg, environ, probe)
    assert before.status is CheckStatus.SKIPPED

    (tmp_path / ".env").write_text("FOO=bar123456\n", encoding="utf-8")
    load_env_file(tmp_path / ".env", environ=environ)
    # "bar123456" is nine characters: past the skip, short of the default
    after = check_external("foo/model", reg, environ, probe)
    assert after.status is CheckStatus.FAILED
    assert after.reason == "credential-invalid"
    assert probe.calls == 0

    relaxed = check_external("foo/model", reg, environ, probe,
                             min_credential_length=9)
    assert relaxed.status is CheckStatus.WORKING_WITH_CAVEAT
    assert probe.calls == 1


def test_raising_probe_is_contained(demo_registry):
    class BrokenProbe:
        tool = "aider"

        def probe(self):
            raise RuntimeError("spawn failed")

    res = check_external("demo/x", demo_registry, {"DEMO_KEY": "k" * 32},
                         BrokenProbe())
    assert res.status is CheckStatus.WORKING_WITH_CAVEAT
    assert res.reason == "probe-error"
