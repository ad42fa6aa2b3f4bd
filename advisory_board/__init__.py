"""Virtual advisory board tool server."""

from advisory_board.agent import AdvisoryBoardAgent
from advisory_board.config import ConfigError, ServerConfig, configure_logging, load_config
from advisory_board.dispatcher import ToolDispatcher, ToolError, ToolResponse
from advisory_board.personas import PERSONAS, PersonaRecord
from advisory_board.registry import (
    AdvisorNotFound,
    PersonaRegistry,
    default_registry,
    normalize_advisor_id,
)
from advisory_board.tools import ToolDescriptor, ToolValidationError, UnknownToolError

__all__ = [
    "AdvisorNotFound",
    "AdvisoryBoardAgent",
    "ConfigError",
    "PERSONAS",
    "PersonaRecord",
    "PersonaRegistry",
    "ServerConfig",
    "ToolDescriptor",
    "ToolDispatcher",
    "ToolError",
    "ToolResponse",
    "ToolValidationError",
    "UnknownToolError",
    "configure_logging",
    "default_registry",
    "load_config",
    "normalize_advisor_id",
]
