"""
Unit tests for the run.py launcher
"""
import os

import pytest

import run


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty working directory with the launcher's environment variables restored afterwards."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.delenv("SECURITY_APP_PASSWORD", raising=False)
    return tmp_path


@pytest.fixture
def served(monkeypatch):
    calls = []
    monkeypatch.setattr("uvicorn.run", lambda target, **kwargs: calls.append((target, kwargs)))
    return calls


def test_list_envs_skips_samples(workdir, capsys):
    (workdir / ".env.staging").write_text("ENVIRONMENT=staging\n")
    (workdir / ".env.production.sample").write_text("")

    assert run.main(["--list-envs"]) == 0
    out = capsys.readouterr().out
    assert "  - staging" in out
    assert "production" not in out


def test_create_sample_and_validate(workdir):
    assert run.main(["--create-sample", "staging"]) == 0
    assert (workdir / ".env.staging.sample").exists()

    assert run.main(["--validate-env", "staging"]) == 1
    (workdir / ".env.staging").write_text("ENVIRONMENT=staging\n")
    assert run.main(["--validate-env", "staging"]) == 0


def test_create_sample_for_unknown_environment_fails(workdir):
    assert run.main(["--create-sample", "moon"]) == 1


def test_command_line_overrides_reach_uvicorn(workdir, served):
    assert run.main(["--env", "testing", "--host", "127.0.0.1", "--port", "9100", "--workers", "3"]) == 0

    [(target, kwargs)] = served
    assert target == "trip_planner.main:app"
    assert (kwargs["host"], kwargs["port"], kwargs["workers"], kwargs["reload"]) == ("127.0.0.1", 9100, 3, False)


def test_reload_forces_single_worker_and_exports_choices(workdir, served):
    assert run.main(["--env", "staging", "--workers", "4", "--reload", "--debug"]) == 0

    [(_, kwargs)] = served
    assert kwargs["reload"] is True
    assert kwargs["workers"] == 1
    assert os.environ["ENVIRONMENT"] == "staging"
    assert os.environ["DEBUG"] == "true"


def test_production_without_password_does_not_start(workdir, served):
    assert run.main(["--env", "production"]) == 1
    assert served == []
