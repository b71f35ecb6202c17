"""
MCP Transport implementations.

Stdio transport (newline-delimited JSON-RPC over stdin/stdout) for local
clients that launch the server as a subprocess, and an HTTP transport for
clients that talk to a long-running server.
"""

import asyncio
import sys
from collections.abc import Awaitable, Callable

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger

from google_search_mcp.mcp.protocol import (
    InvalidRequestError,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    MCPErrorCodes,
    MCPProtocolHandler,
)

MessageHandler = Callable[
    [JSONRPCRequest | JSONRPCNotification], Awaitable[JSONRPCResponse | None]
]

# Upper bound for one stdio message; search queries are passed through whole.
STDIO_READ_LIMIT = 16 * 1024 * 1024


class MCPTransport:
    """Base class for MCP transports."""

    def __init__(self, protocol_handler: MCPProtocolHandler):
        self.protocol_handler = protocol_handler
        self.message_handler: MessageHandler | None = None
        self.running = False

    def set_message_handler(self, handler: MessageHandler | None):
        """Set the message handler for this transport."""
        self.message_handler = handler

    async def start(self):
        """Start the transport."""
        self.running = True

    async def stop(self):
        """Stop the transport."""
        self.running = False

    async def wait_closed(self):
        """Wait until the transport stops serving."""

    async def dispatch(self, raw_message: str | bytes) -> JSONRPCResponse | None:
        """
        Parse one raw message and route it to the message handler.

        Returns:
            The response to send back, or None for notifications and for
            messages that are not requests.
        """
        try:
            message = self.protocol_handler.parse_message(raw_message)
        except InvalidRequestError as e:
            logger.error(f'Invalid JSON-RPC message: {e}')
            return self.protocol_handler.create_error_response(
                e.request_id, MCPErrorCodes.INVALID_REQUEST, str(e)
            )
        except ValueError as e:
            logger.error(f'Error parsing message: {e}')
            return self.protocol_handler.create_error_response(
                None, MCPErrorCodes.PARSE_ERROR, str(e)
            )

        if not self.message_handler:
            logger.warning('No message handler set; dropping message')
            return None

        if isinstance(message, JSONRPCRequest):
            try:
                return await self.message_handler(message)
            except Exception as e:
                logger.exception('Error processing request')
                return self.protocol_handler.create_error_response(
                    message.id, MCPErrorCodes.INTERNAL_ERROR, f'Internal error: {e}'
                )

        if isinstance(message, JSONRPCNotification):
            await self.message_handler(message)
        else:
            # This server never issues requests, so responses are unexpected.
            logger.debug(f'Ignoring JSON-RPC response for id {message.id}')
        return None


class StdioTransport(MCPTransport):
    """
    Stdio transport for MCP.

    This transport uses stdin/stdout for communication, one JSON-RPC message
    per line, suitable for clients that spawn the server as a subprocess.
    """

    def __init__(
        self,
        protocol_handler: MCPProtocolHandler,
        read_limit: int = STDIO_READ_LIMIT,
    ):
        super().__init__(protocol_handler)
        self.read_limit = read_limit
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.message_loop_task: asyncio.Task | None = None

    async def start(self):
        """Start the stdio transport."""
        await super().start()
        loop = asyncio.get_running_loop()

        self.reader = asyncio.StreamReader(limit=self.read_limit)
        protocol = asyncio.StreamReaderProtocol(self.reader)
        await loop.connect_read_pipe(lambda: protocol, sys.stdin)

        transport, protocol = await loop.connect_write_pipe(
            asyncio.streams.FlowControlMixin, sys.stdout
        )
        self.writer = asyncio.StreamWriter(transport, protocol, self.reader, loop)

        self.message_loop_task = asyncio.create_task(self._message_loop())

    async def stop(self):
        """Stop the stdio transport."""
        await super().stop()
        if self.message_loop_task and not self.message_loop_task.done():
            self.message_loop_task.cancel()
            try:
                await self.message_loop_task
            except asyncio.CancelledError:
                pass

    async def wait_closed(self):
        """Wait until stdin is closed by the client."""
        if self.message_loop_task:
            await self.message_loop_task

    async def send_message(self, message: JSONRPCResponse):
        """Send a JSON-RPC message via stdout."""
        if not self.writer:
            return

        message_str = self.protocol_handler.serialize_message(message)
        self.writer.write(f'{message_str}\n'.encode())
        await self.writer.drain()

    async def handle_line(self, line: bytes) -> None:
        """Handle one line read from stdin."""
        if not line.strip():
            return

        response = await self.dispatch(line)
        if response is not None:
            await self.send_message(response)

    async def _message_loop(self):
        """Main message processing loop; ends on stdin EOF."""
        while self.running and self.reader:
            try:
                line = await self.reader.readline()
            except ValueError as e:
                # readline() has already dropped the buffered chunk.
                logger.error(f'Dropping oversized stdin message: {e}')
                await self.send_message(
                    self.protocol_handler.create_error_response(
                        None, MCPErrorCodes.PARSE_ERROR, f'Message too large: {e}'
                    )
                )
                continue
            if not line:
                logger.info('stdin closed, stopping stdio transport')
                break
            try:
                await self.handle_line(line)
            except Exception:
                logger.exception('Error in message loop')
        self.running = False


class HTTPTransport(MCPTransport):
    """
    HTTP transport for MCP using FastAPI.

    JSON-RPC messages are POSTed to ``/mcp``; requests get the JSON-RPC
    response as the body, notifications get 202 with no body.
    """

    def __init__(
        self,
        protocol_handler: MCPProtocolHandler,
        host: str = 'localhost',
        port: int = 8000,
        title: str = 'Google Search MCP Server',
        version: str = '1.0.0',
    ):
        super().__init__(protocol_handler)
        self.host = host
        self.port = port
        self.app = FastAPI(
            title=title,
            description='Model Context Protocol server for Google web search',
            version=version,
        )
        self.server: uvicorn.Server | None = None
        self._server_task: asyncio.Task | None = None
        self._setup_routes()

    def _setup_routes(self):
        """Set up HTTP routes for MCP."""

        @self.app.post('/mcp')
        async def handle_mcp_request(request: Request):
            """Handle MCP JSON-RPC requests and notifications."""
            body = await request.body()
            response = await self.dispatch(body)
            if response is None:
                return Response(status_code=202)
            return JSONResponse(content=self.protocol_handler.to_wire(response))

        @self.app.get('/health')
        async def health_check():
            """Health check endpoint."""
            return {
                'status': 'ok',
                'protocol': 'MCP',
                'version': self.protocol_handler.protocol_version,
                'initialized': self.protocol_handler.initialized,
            }

    async def start(self):
        """Start the HTTP server in the background."""
        await super().start()
        config = uvicorn.Config(
            app=self.app, host=self.host, port=self.port, log_level='warning'
        )
        self.server = uvicorn.Server(config)
        self._server_task = asyncio.create_task(self.server.serve())

    async def stop(self):
        """Stop the HTTP server."""
        await super().stop()
        if self.server:
            self.server.should_exit = True
        if self._server_task:
            await self._server_task

    async def wait_closed(self):
        """Wait until the HTTP server exits."""
        if self._server_task:
            await self._server_task


class TransportManager:
    """Manages the transports of a server."""

    def __init__(self, protocol_handler: MCPProtocolHandler):
        self.protocol_handler = protocol_handler
        self.transports: dict[str, MCPTransport] = {}
        self._handle_message: MessageHandler | None = None

    def add_transport(self, name: str, transport: MCPTransport):
        """Add a transport to the manager."""
        transport.set_message_handler(self._handle_message)
        self.transports[name] = transport

    def set_message_handler(self, handler: MessageHandler):
        """Set the message handler for all transports."""
        self._handle_message = handler
        for transport in self.transports.values():
            transport.set_message_handler(handler)

    async def start_all(self):
        """Start all transports."""
        if not self.transports:
            raise RuntimeError('No MCP transports configured')

        for name, transport in self.transports.items():
            await transport.start()
            logger.info(f'Started MCP transport: {name}')

    async def wait_closed(self):
        """Wait until the first transport stops serving."""
        waiters = [
            asyncio.create_task(transport.wait_closed())
            for transport in self.transports.values()
        ]
        done, pending = await asyncio.wait(
            waiters, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        for task in done:
            task.result()

    async def stop_all(self):
        """Stop all transports."""
        for name, transport in self.transports.items():
            await transport.stop()
            logger.info(f'Stopped MCP transport: {name}')
