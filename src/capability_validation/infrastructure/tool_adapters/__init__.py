"""
Tool adapter package

Provides a unified interface to each AI tool.
"""

from capability_validation.infrastructure.tool_adapters.base import ToolAdapter
from capability_validation.infrastructure.tool_adapters.factory import SUPPORTED_TOOLS, create_adapter
from capability_validation.infrastructure.tool_adapters.generic import GenericToolAdapter

__all__ = ["GenericToolAdapter", "SUPPORTED_TOOLS", "ToolAdapter", "create_adapter"]
