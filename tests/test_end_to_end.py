import os
import socket
import subprocess
import sys
import time
from pathlib import Path

import httpx
import pytest

SERVER_SCRIPT = Path(__file__).resolve().parents[1] / "main_server" / "fastapi_server.py"
STARTUP_TIMEOUT_SEC = 20.0


def _free_port() -> int:
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]
    finally:
        s.close()


def _server_env(port: int) -> dict:
    env = os.environ.copy()
    env["PORT"] = str(port)
    env["HOST"] = "127.0.0.1"
    env["LOG_LEVEL"] = "warning"
    return env


def _wait_for_page(proc: subprocess.Popen, url: str) -> httpx.Response:
    deadline = time.monotonic() + STARTUP_TIMEOUT_SEC
    while time.monotonic() < deadline:
        if proc.poll() is not None:
            pytest.fail(f"server exited early with code {proc.returncode}")
        try:
            return httpx.get(url, timeout=1.0, trust_env=False)
        except httpx.TransportError:
            time.sleep(0.1)
    pytest.fail(f"server did not answer on {url}")


@pytest.fixture
def running_server():
    port = _free_port()
    proc = subprocess.Popen(
        [sys.executable, str(SERVER_SCRIPT)],
        env=_server_env(port),
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    try:
        yield proc, port
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=10)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()


def test_live_server_serves_index(running_server):
    proc, port = running_server

    res = _wait_for_page(proc, f"http://127.0.0.1:{port}/")

    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]
    assert "<h1>Claude Example</h1>" in res.text
    assert httpx.get(f"http://127.0.0.1:{port}/", timeout=2.0, trust_env=False).content == res.content


def test_second_instance_on_same_port_exits_1(running_server):
    proc, port = running_server
    _wait_for_page(proc, f"http://127.0.0.1:{port}/")

    second = subprocess.run(
        [sys.executable, str(SERVER_SCRIPT)],
        env=_server_env(port),
        capture_output=True,
        text=True,
        timeout=30,
    )

    assert second.returncode == 1
    assert "LISTEN_FAIL" in second.stderr
    assert "Server failed to start" in second.stderr
    # first instance keeps serving
    assert proc.poll() is None
    assert httpx.get(f"http://127.0.0.1:{port}/", timeout=2.0, trust_env=False).status_code == 200
