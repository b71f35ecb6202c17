"""
MCP Tool Implementation

This module provides the base class for MCP tools and the registry the
server dispatches ``tools/call`` requests through.
"""

from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from .protocol import MCPToolCallResult, MCPToolSchema


class MCPTool(ABC):
    """
    Base class for MCP-compliant tools.

    Tools receive the raw ``arguments`` mapping and are responsible for
    validating it; the registry does not pre-check against ``input_schema``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name (must be unique)."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description for the LLM."""
        pass

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema advertised to clients in ``tools/list``."""
        pass

    @abstractmethod
    async def execute(self, arguments: dict[str, Any]) -> MCPToolCallResult:
        """
        Execute the tool with given arguments.

        Args:
            arguments: Raw tool arguments from the client

        Returns:
            MCPToolCallResult with content and error status
        """
        pass

    def to_schema(self) -> MCPToolSchema:
        """Convert tool to MCP schema format."""
        return MCPToolSchema(
            name=self.name, description=self.description, inputSchema=self.input_schema
        )

    def text_result(self, text: str, is_error: bool = False) -> MCPToolCallResult:
        """Wrap text in a single text content block."""
        return MCPToolCallResult(
            content=[{'type': 'text', 'text': text}], isError=is_error
        )

    def handle_error(
        self, error: Exception, prefix: str | None = None
    ) -> MCPToolCallResult:
        """Standard error handling for tools."""
        message = f'{prefix}: {error}' if prefix else str(error)
        logger.error(f'Tool error in {self.name}: {message}')
        return self.text_result(message, is_error=True)


class MCPToolRegistry:
    """Registry of tool instances, keyed by tool name."""

    def __init__(self):
        self._tools: dict[str, MCPTool] = {}

    def register_instance(self, tool: MCPTool) -> None:
        """Register a tool instance, replacing any tool with the same name."""
        if tool.name in self._tools:
            logger.warning(f'Replacing registered MCP tool: {tool.name}')
        self._tools[tool.name] = tool
        logger.debug(f'Registered MCP tool instance: {tool.name}')

    def get_tool(self, name: str) -> MCPTool | None:
        """Get a tool instance by name."""
        return self._tools.get(name)

    def get_all_tools(self) -> list[MCPTool]:
        """Get all registered tools in registration order."""
        return list(self._tools.values())

    def get_tool_schemas(self) -> list[MCPToolSchema]:
        """Get MCP schemas for all registered tools."""
        return [tool.to_schema() for tool in self.get_all_tools()]

    def get_tool_names(self) -> list[str]:
        """Get names of registered tools."""
        return list(self._tools)

    async def execute_tool(
        self, name: str, arguments: dict[str, Any]
    ) -> MCPToolCallResult:
        """Execute a tool by name with given arguments."""
        tool = self.get_tool(name)
        if not tool:
            return MCPToolCallResult(
                content=[{'type': 'text', 'text': f"Tool '{name}' not found"}],
                isError=True,
            )

        try:
            logger.debug(f"Executing tool '{name}' with arguments: {arguments}")
            result = await tool.execute(arguments)
            logger.debug(f"Tool '{name}' completed (isError={result.isError})")
            return result
        except Exception as e:
            logger.exception(f"Tool execution failed for '{name}'")
            return tool.handle_error(e, prefix=f'Error in {name}')
