"""End-to-end tests for tools.mcp_server through an in-memory MCP session."""

import contextlib
import json
import logging

import pytest
from mcp import types
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session

import tools.mcp_server
from core.errors import DocumentNotFound, InvalidArgument, StorageError, UnknownTool
from tools.dispatcher import CallTool, ListResources, ListTools, ReadResource
from tools.mcp_server import RESOURCE_NOT_FOUND, SERVER_NAME, _log_response, create_server, serve, to_mcp_error


class TestToMcpError:
    def test_not_found(self):
        error = to_mcp_error(DocumentNotFound("docs://x.md")).error
        assert error.code == RESOURCE_NOT_FOUND
        assert "docs://x.md" in error.message

    @pytest.mark.parametrize("exc", [InvalidArgument("search_docs", "query: required"), UnknownTool("nope")])
    def test_caller_errors(self, exc):
        assert to_mcp_error(exc).error.code == types.INVALID_PARAMS

    def test_storage_error(self):
        assert to_mcp_error(StorageError("guide.md", "Permission denied")).error.code == types.INTERNAL_ERROR


class TestLogResponse:
    def test_logs_compact_json_at_info(self, dispatcher, caplog):
        caplog.set_level(logging.INFO, logger="docs_mcp")
        result = dispatcher.list_tools()

        assert _log_response("tools/list", result) is result

        [record] = [r for r in caplog.records if "tools/list response:" in r.getMessage()]
        assert record.levelno == logging.INFO
        assert '"name":"search_docs"' in record.getMessage()


class TestServer:
    def test_server_identity(self, dispatcher):
        assert create_server(dispatcher).name == SERVER_NAME

    def test_capabilities(self, dispatcher):
        options = create_server(dispatcher).create_initialization_options()
        assert options.server_name == SERVER_NAME
        assert options.capabilities.resources is not None
        assert options.capabilities.tools is not None

    @pytest.mark.asyncio
    async def test_list_and_read_resources(self, dispatcher):
        async with create_connected_server_and_client_session(create_server(dispatcher)) as session:
            listed = await session.list_resources()
            uris = sorted(str(r.uri) for r in listed.resources)
            assert uris == ["docs://faq.md", "docs://guide.md"]

            read = await session.read_resource(listed.resources[0].uri)
            assert read.contents[0].mimeType == "text/markdown"
            assert read.contents[0].text in ("Billing questions", "Setup instructions for API keys")

    @pytest.mark.asyncio
    async def test_read_missing_resource_is_protocol_error(self, dispatcher):
        async with create_connected_server_and_client_session(create_server(dispatcher)) as session:
            with pytest.raises(McpError) as exc_info:
                await session.read_resource("docs://missing.md")
            assert exc_info.value.error.code == RESOURCE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_tools(self, dispatcher):
        async with create_connected_server_and_client_session(create_server(dispatcher)) as session:
            tools = await session.list_tools()
            assert [t.name for t in tools.tools] == ["search_docs", "get_weather"]

            searched = await session.call_tool("search_docs", {"query": "setup"})
            assert json.loads(searched.content[0].text)[0]["file"] == "guide.md"

            weather = await session.call_tool("get_weather", {"city": "Oslo"})
            assert "Temperature: 16°C" in weather.content[0].text

    @pytest.mark.asyncio
    async def test_handlers_route_through_dispatch(self, dispatcher, monkeypatch):
        seen = []
        dispatch = dispatcher.dispatch

        def recording_dispatch(request):
            seen.append(request)
            return dispatch(request)

        monkeypatch.setattr(dispatcher, "dispatch", recording_dispatch)
        async with create_connected_server_and_client_session(create_server(dispatcher)) as session:
            await session.list_resources()
            await session.read_resource("docs://faq.md")
            await session.list_tools()
            await session.call_tool("search_docs", {"query": "billing"})

        assert seen[:4] == [
            ListResources(),
            ReadResource("docs://faq.md"),
            ListTools(),
            CallTool("search_docs", {"query": "billing"}),
        ]


class TestServe:
    @pytest.mark.asyncio
    async def test_runs_over_stdio_and_logs_startup(self, monkeypatch, caplog):
        caplog.set_level(logging.INFO, logger="docs_mcp")
        streams = (object(), object())

        @contextlib.asynccontextmanager
        async def fake_stdio_server():
            yield streams

        runs = []

        class RecordingServer:
            def create_initialization_options(self):
                return "options"

            async def run(self, read_stream, write_stream, options):
                runs.append((read_stream, write_stream, options))

        monkeypatch.setattr(tools.mcp_server, "stdio_server", fake_stdio_server)

        await serve(RecordingServer())

        assert runs == [(*streams, "options")]
        assert "Docs MCP server running on stdio" in caplog.text
