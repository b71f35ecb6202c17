"""
MCP Protocol Implementation

JSON-RPC 2.0 message models and the protocol handler for the subset of the
Model Context Protocol this server speaks: the initialize handshake, ping,
tool listing and tool calls.
"""

import json
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError, model_validator

LATEST_PROTOCOL_VERSION = '2025-06-18'
SUPPORTED_PROTOCOL_VERSIONS = ('2025-06-18', '2025-03-26', '2024-11-05')


class InvalidRequestError(ValueError):
    """Raised for valid JSON that is not a valid JSON-RPC 2.0 message."""

    def __init__(self, message: str, request_id: str | int | None = None):
        super().__init__(message)
        self.request_id = request_id


class JSONRPCError(BaseModel):
    """JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any | None = None


class JSONRPCRequest(BaseModel):
    """JSON-RPC 2.0 request message."""

    jsonrpc: str = '2.0'
    id: str | int
    method: str
    params: dict[str, Any] | None = None


class JSONRPCResponse(BaseModel):
    """JSON-RPC 2.0 response message."""

    jsonrpc: str = '2.0'
    id: str | int | None
    result: Any | None = None
    error: JSONRPCError | None = None

    @model_validator(mode='after')
    def validate_response_structure(self):
        """Validate that exactly one of result or error is present."""
        if self.result is not None and self.error is not None:
            raise ValueError('Response cannot have both result and error')
        if self.result is None and self.error is None:
            raise ValueError('Response must have either result or error')
        return self


class JSONRPCNotification(BaseModel):
    """JSON-RPC 2.0 notification message."""

    jsonrpc: str = '2.0'
    method: str
    params: dict[str, Any] | None = None


class MCPCapabilities(BaseModel):
    """MCP capabilities advertised by either side."""

    tools: dict[str, Any] | None = None
    logging: dict[str, Any] | None = None
    experimental: dict[str, Any] | None = None


class MCPServerInfo(BaseModel):
    """MCP implementation info (server or client)."""

    name: str
    version: str


class MCPInitializeParams(BaseModel):
    """Parameters for MCP initialize request."""

    protocolVersion: str
    capabilities: dict[str, Any] = {}
    clientInfo: MCPServerInfo


class MCPInitializeResult(BaseModel):
    """Result for MCP initialize response."""

    protocolVersion: str = LATEST_PROTOCOL_VERSION
    capabilities: MCPCapabilities
    serverInfo: MCPServerInfo


class MCPToolSchema(BaseModel):
    """MCP tool definition schema."""

    name: str
    description: str
    inputSchema: dict[str, Any]


class MCPToolCallParams(BaseModel):
    """Parameters for MCP tool call."""

    name: str
    arguments: dict[str, Any] | None = None


class MCPToolCallResult(BaseModel):
    """Result for MCP tool call."""

    content: list[dict[str, Any]]
    isError: bool = False


class MCPProtocolHandler:
    """
    Core MCP protocol message handler.

    Parses and serializes JSON-RPC 2.0 messages and tracks the state of the
    initialize handshake.
    """

    def __init__(self):
        self.initialized = False
        self.client_info: MCPServerInfo | None = None
        self.protocol_version = LATEST_PROTOCOL_VERSION

    def parse_message(
        self, raw_message: str | bytes
    ) -> JSONRPCRequest | JSONRPCResponse | JSONRPCNotification:
        """
        Parse raw JSON message into appropriate JSON-RPC object.

        Raises:
            ValueError: If the message is not valid JSON
            InvalidRequestError: If the JSON is not a valid JSON-RPC message
        """
        try:
            data = json.loads(raw_message)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValueError(f'Invalid JSON: {e}') from e

        if not isinstance(data, dict):
            raise InvalidRequestError('JSON-RPC message must be an object')

        request_id = data.get('id')
        if isinstance(request_id, bool) or not isinstance(request_id, str | int):
            request_id = None

        if data.get('jsonrpc') != '2.0':
            raise InvalidRequestError('Invalid JSON-RPC version', request_id)

        try:
            if 'method' in data:
                if 'id' in data:
                    return JSONRPCRequest(**data)
                return JSONRPCNotification(**data)
            if 'result' in data or 'error' in data:
                return JSONRPCResponse(**data)
        except ValidationError as e:
            raise InvalidRequestError(
                f'Invalid message format: {e}', request_id
            ) from e

        raise InvalidRequestError('Invalid JSON-RPC message format', request_id)

    def create_response(
        self,
        request_id: str | int | None,
        result: Any = None,
        error: JSONRPCError | None = None,
    ) -> JSONRPCResponse:
        """Create a JSON-RPC response message."""
        if error is not None:
            return JSONRPCResponse(id=request_id, error=error)
        return JSONRPCResponse(id=request_id, result=result)

    def create_error_response(
        self,
        request_id: str | int | None,
        code: int,
        message: str,
        data: Any = None,
    ) -> JSONRPCResponse:
        """Create a JSON-RPC error response."""
        error = JSONRPCError(code=code, message=message, data=data)
        return self.create_response(request_id, error=error)

    def validate_initialize_request(
        self, params: dict[str, Any]
    ) -> MCPInitializeParams:
        """Validate and parse initialize request parameters."""
        try:
            return MCPInitializeParams(**params)
        except ValidationError as e:
            raise ValueError(f'Invalid initialize parameters: {e}') from e

    def handle_initialize(
        self,
        params: MCPInitializeParams,
        server_info: MCPServerInfo,
        server_capabilities: MCPCapabilities,
    ) -> MCPInitializeResult:
        """
        Handle MCP initialize request.

        The client's protocol version is echoed back when supported; otherwise
        the latest version is offered and the client decides whether to
        continue.
        """
        if params.protocolVersion in SUPPORTED_PROTOCOL_VERSIONS:
            self.protocol_version = params.protocolVersion
        else:
            logger.warning(
                f'Unsupported protocol version from client: {params.protocolVersion}, '
                f'offering {LATEST_PROTOCOL_VERSION}'
            )
            self.protocol_version = LATEST_PROTOCOL_VERSION

        self.client_info = params.clientInfo
        logger.info(
            f'Client connecting: {params.clientInfo.name} {params.clientInfo.version}'
        )

        return MCPInitializeResult(
            protocolVersion=self.protocol_version,
            capabilities=server_capabilities,
            serverInfo=server_info,
        )

    def handle_initialized(self) -> None:
        """Handle the initialized notification that ends the handshake."""
        if self.client_info is None:
            logger.warning('Received initialized notification before initialize')
        self.initialized = True
        logger.info('MCP client initialization completed')

    def validate_tool_call_params(self, params: dict[str, Any]) -> MCPToolCallParams:
        """Validate and parse tool call parameters."""
        try:
            return MCPToolCallParams(**params)
        except ValidationError as e:
            raise ValueError(f'Invalid tool call parameters: {e}') from e

    def to_wire(
        self, message: JSONRPCRequest | JSONRPCResponse | JSONRPCNotification
    ) -> dict[str, Any]:
        """Convert a message to its JSON-compatible wire form."""
        data = message.model_dump(mode='json', exclude_none=True)
        # Responses to unidentifiable requests must still carry "id": null
        if isinstance(message, JSONRPCResponse):
            data.setdefault('id', None)
        return data

    def serialize_message(
        self, message: JSONRPCRequest | JSONRPCResponse | JSONRPCNotification
    ) -> str:
        """Serialize message object to JSON string."""
        return json.dumps(self.to_wire(message), separators=(',', ':'))


class MCPErrorCodes:
    """Standard error codes following JSON-RPC 2.0 specification."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
