import subprocess

import pytest

from probekit.testutils import (
    run_httpx_and_get_combined_results,
    run_httpx_and_get_results,
    run_httpx_binary_and_get_results,
)

ECHO_ARGS = 'cat\necho "args: $*"\n'


def write_script(path, body):
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(0o755)
    return path


def test_results_include_input_and_silent_flag(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_script(tmp_path / "probekit", ECHO_ARGS)
    results = run_httpx_and_get_results("http://a.test", False, "-title")
    assert results == ["http://a.test", "args: -title -silent"]


def test_debug_flag_replaces_silent(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_script(tmp_path / "probekit", ECHO_ARGS)
    results = run_httpx_and_get_results("http://a.test", True)
    assert results == ["http://a.test", "args: -debug"]


def test_empty_lines_are_dropped(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_script(tmp_path / "probekit", 'printf "a\\n\\n\\nb\\n"\n')
    assert run_httpx_and_get_results("x", False) == ["a", "b"]


def test_failing_tool_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_script(tmp_path / "probekit", "exit 3\n")
    with pytest.raises(subprocess.CalledProcessError) as info:
        run_httpx_and_get_results("x", False)
    assert info.value.returncode == 3


def test_combined_results_hold_stderr(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_script(tmp_path / "probekit", 'cat\necho "to stderr" >&2\n')
    output = run_httpx_and_get_combined_results("http://b.test", False)
    assert "http://b.test" in output
    assert "to stderr" in output


def test_binary_results(tmp_path):
    binary = write_script(tmp_path / "tool", ECHO_ARGS)
    results = run_httpx_binary_and_get_results("example.com", str(binary), False, ["-sc"])
    assert results == ["example.com", "args: -sc -silent"]