# The module is to define the interface shared by every callable tool.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.2.0

from abc import ABC, abstractmethod
from typing import Any, Dict, Literal

DefinitionFormat = Literal["openai", "mcp"]


class BaseTool(ABC):
    """
    Abstract Base Class for all tools.

    Attributes:
        name (str): The tool id clients call it by.
        description (str): Human-readable summary of the operation.
        input_schema (Dict[str, Any]): JSON schema of the accepted arguments.
    """
    name: str
    description: str
    input_schema: Dict[str, Any]

    @abstractmethod
    async def execute(self, /, **kwargs) -> str:
        """
        Performs the tool's operation with arguments matching input_schema
        and returns the textual result.
        """

    def get_definition(self, format: DefinitionFormat = "openai") -> Dict[str, Any]:
        """
        Returns the tool descriptor that tool-calling clients list.

        'openai' yields the function-calling shape; 'mcp' yields the
        name/description/inputSchema shape of an MCP tools listing.
        """
        if format == "mcp":
            return {
                "name": self.name,
                "description": self.description,
                "inputSchema": self.input_schema,
            }
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            }
        }
