"""Tests for transport backends and transport selection."""

import asyncio
from pathlib import Path

import httpx
import pytest
import respx

from claude_config.config.schema import TransportKind
from claude_config.fetch import selector
from claude_config.fetch.http_client import HttpxTransport
from claude_config.fetch.selector import (
    create_transport,
    is_available,
    select_transport,
)
from claude_config.fetch.tools import CommandTransport, CurlTransport, WgetTransport
from claude_config.utils.errors import ExitCode, FetchError, MissingDependencyError
from conftest import BASE_URL

FILE_URL = f"{BASE_URL}/CLAUDE.md"


class FakeProcess:
    """Stand-in for an asyncio subprocess."""

    def __init__(self, returncode=0, stdout=b"", stderr=b""):
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    async def communicate(self):
        return self._stdout, self._stderr


@pytest.fixture
def fake_exec(monkeypatch):
    """Replace subprocess creation, recording the commands run."""
    calls = []
    state = {"process": FakeProcess(stdout=b"# CLAUDE.md\n")}

    async def create_subprocess_exec(*args, **kwargs):
        calls.append(list(args))
        if isinstance(state["process"], Exception):
            raise state["process"]
        return state["process"]

    monkeypatch.setattr(asyncio, "create_subprocess_exec", create_subprocess_exec)

    def set_process(process):
        state["process"] = process

    return calls, set_process


@pytest.fixture
def which_only(monkeypatch):
    """Pretend only the given tools are on PATH."""

    def configure(*tools):
        monkeypatch.setattr(
            selector.shutil,
            "which",
            lambda name: f"/usr/bin/{name}" if name in tools else None,
        )

    return configure


class TestCommandLines:
    """Test the command lines built for external clients."""

    def test_curl_command(self):
        transport = CurlTransport("/usr/bin/curl")
        assert transport.build_command(FILE_URL) == ["/usr/bin/curl", "-fsSL", FILE_URL]

    def test_curl_command_with_auth_file(self, tmp_path):
        transport = CurlTransport("/usr/bin/curl", token="abc")
        auth_file = tmp_path / "auth"

        assert transport.build_command(FILE_URL, auth_file) == [
            "/usr/bin/curl",
            "-fsSL",
            "-H",
            f"@{auth_file}",
            FILE_URL,
        ]
        assert transport.auth_file_content() == "Authorization: Bearer abc\n"

    def test_wget_command(self):
        transport = WgetTransport("/usr/bin/wget")
        assert transport.build_command(FILE_URL) == [
            "/usr/bin/wget",
            "-nv",
            "-O",
            "-",
            FILE_URL,
        ]

    def test_wget_command_with_auth_file(self, tmp_path):
        transport = WgetTransport("/usr/bin/wget", token="abc")
        auth_file = tmp_path / "wgetrc"

        command = transport.build_command(FILE_URL, auth_file)

        assert f"--config={auth_file}" in command
        assert command[-1] == FILE_URL
        assert transport.auth_file_content() == "header = Authorization: Bearer abc\n"

    def test_command_transport_is_abstract(self):
        with pytest.raises(TypeError):
            CommandTransport("/usr/bin/true")


@pytest.mark.anyio
class TestCommandTransportFetch:
    """Test running external clients."""

    async def test_returns_stdout(self, fake_exec):
        calls, _ = fake_exec

        data = await CurlTransport("/usr/bin/curl").fetch(FILE_URL)

        assert data == b"# CLAUDE.md\n"
        assert calls == [["/usr/bin/curl", "-fsSL", FILE_URL]]

    @pytest.mark.parametrize("transport_class", [CurlTransport, WgetTransport])
    async def test_token_kept_off_command_line(self, monkeypatch, transport_class):
        """Test the token reaches the client through a file, never through argv."""
        seen = {}

        async def create_subprocess_exec(*args, **kwargs):
            seen["args"] = list(args)
            option = next(a for a in args if "auth" in a)
            seen["auth_file"] = Path(option.split("@", 1)[-1].split("=", 1)[-1])
            seen["content"] = seen["auth_file"].read_text()
            return FakeProcess(stdout=b"body")

        monkeypatch.setattr(asyncio, "create_subprocess_exec", create_subprocess_exec)
        transport = transport_class(f"/usr/bin/{transport_class.name}", token="ghp_SECRET")

        data = await transport.fetch(FILE_URL)

        assert data == b"body"
        assert not any("ghp_SECRET" in arg for arg in seen["args"])
        assert "Authorization: Bearer ghp_SECRET" in seen["content"]
        assert not seen["auth_file"].exists()

    async def test_non_zero_exit_raises(self, fake_exec):
        _, set_process = fake_exec
        set_process(
            FakeProcess(
                returncode=22,
                stderr=b"curl: (22) The requested URL returned error: 404\n",
            )
        )

        with pytest.raises(FetchError) as exc_info:
            await CurlTransport("/usr/bin/curl").fetch(FILE_URL)

        assert exc_info.value.url == FILE_URL
        assert "404" in exc_info.value.reason

    async def test_non_zero_exit_without_stderr(self, fake_exec):
        _, set_process = fake_exec
        set_process(FakeProcess(returncode=8))

        with pytest.raises(FetchError, match="wget exited with status 8"):
            await WgetTransport("/usr/bin/wget").fetch(FILE_URL)

    async def test_wget_404_reports_status(self, fake_exec):
        """Test wget's non-verbose error line is carried into the failure."""
        _, set_process = fake_exec
        set_process(
            FakeProcess(
                returncode=8,
                stderr=f"{FILE_URL}:\n2026-01-01 12:00:00 ERROR 404: Not Found.\n".encode(),
            )
        )

        with pytest.raises(FetchError) as exc_info:
            await WgetTransport("/usr/bin/wget").fetch(FILE_URL)

        assert "ERROR 404: Not Found" in exc_info.value.reason

    async def test_client_cannot_start(self, fake_exec):
        _, set_process = fake_exec
        set_process(FileNotFoundError("No such file or directory: '/usr/bin/curl'"))

        with pytest.raises(FetchError, match="could not run curl"):
            await CurlTransport("/usr/bin/curl").fetch(FILE_URL)


@pytest.mark.anyio
class TestHttpxTransport:
    """Test the in-process httpx transport."""

    @respx.mock
    async def test_fetch_returns_body(self):
        respx.get(FILE_URL).mock(return_value=httpx.Response(200, content=b"# Rules"))

        data = await HttpxTransport().fetch(FILE_URL)

        assert data == b"# Rules"

    @respx.mock
    async def test_fetch_404(self):
        respx.get(FILE_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(FetchError) as exc_info:
            await HttpxTransport().fetch(FILE_URL)

        assert exc_info.value.reason == "HTTP 404 Not Found"
        assert exc_info.value.exit_code == ExitCode.TRANSFER_FAILED

    @respx.mock
    async def test_network_error(self):
        respx.get(FILE_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(FetchError, match="connection refused"):
            await HttpxTransport().fetch(FILE_URL)

    @respx.mock
    async def test_no_retry(self):
        """Test a failed request is made exactly once."""
        route = respx.get(FILE_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(FetchError):
            await HttpxTransport().fetch(FILE_URL)

        assert route.call_count == 1

    @respx.mock
    async def test_follows_redirects(self):
        moved = f"{BASE_URL}/moved/CLAUDE.md"
        respx.get(FILE_URL).mock(
            return_value=httpx.Response(301, headers={"Location": moved})
        )
        respx.get(moved).mock(return_value=httpx.Response(200, content=b"moved"))

        assert await HttpxTransport().fetch(FILE_URL) == b"moved"

    @respx.mock
    async def test_token_header(self):
        route = respx.get(FILE_URL).mock(return_value=httpx.Response(200, content=b""))

        await HttpxTransport(token="test-token-123").fetch(FILE_URL)

        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer test-token-123"

    @respx.mock
    async def test_no_token_header_by_default(self):
        route = respx.get(FILE_URL).mock(return_value=httpx.Response(200, content=b""))

        await HttpxTransport().fetch(FILE_URL)

        assert "Authorization" not in route.calls.last.request.headers


class TestSelection:
    """Test picking a transport by availability."""

    def test_prefers_curl(self, which_only):
        which_only("curl", "wget")

        transport = select_transport()

        assert isinstance(transport, CurlTransport)
        assert transport.executable == "/usr/bin/curl"

    def test_falls_back_to_wget(self, which_only):
        which_only("wget")

        transport = select_transport()

        assert isinstance(transport, WgetTransport)
        assert transport.executable == "/usr/bin/wget"

    def test_neither_available(self, which_only):
        which_only()

        with pytest.raises(MissingDependencyError) as exc_info:
            select_transport()

        assert exc_info.value.tried == ["curl", "wget"]
        assert "Neither curl nor wget found" in str(exc_info.value)
        assert exc_info.value.exit_code == ExitCode.MISSING_DEPENDENCY

    def test_respects_preference_order(self, which_only):
        which_only("curl", "wget")

        transport = select_transport([TransportKind.WGET, TransportKind.CURL])

        assert isinstance(transport, WgetTransport)

    def test_httpx_always_available(self, which_only):
        which_only()

        transport = select_transport(
            [TransportKind.CURL, TransportKind.HTTPX], token="t", timeout=5.0
        )

        assert isinstance(transport, HttpxTransport)
        assert transport.token == "t"
        assert transport.timeout == 5.0

    def test_accepts_string_kinds(self, which_only):
        which_only("wget")

        assert isinstance(select_transport(["wget"]), WgetTransport)

    def test_token_passed_to_command_transport(self, which_only):
        which_only("curl")

        transport = select_transport(token="secret")

        assert transport.token == "secret"

    def test_is_available(self, which_only):
        which_only("curl")

        assert is_available(TransportKind.CURL)
        assert not is_available(TransportKind.WGET)
        assert is_available(TransportKind.HTTPX)

    def test_create_missing_tool(self, which_only):
        which_only()

        with pytest.raises(MissingDependencyError, match="wget"):
            create_transport(TransportKind.WGET)
