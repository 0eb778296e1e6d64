"""
Main file MCP Server Figma Insight.
"""
import json
import logging

from .mcp_instance import mcp
from .config import config
from .metrics import get_metrics
from . import __version__
from . import tools  # noqa: F401  регистрирует инструменты


logging.basicConfig(
    level=getattr(logging, config.server.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Health check endpoint
@mcp.resource("health://check")
async def health_check() -> str:
    """Health check endpoint"""
    return json.dumps({
        "status": "healthy",
        "service": "figma-insight-server",
        "version": __version__
    })


@mcp.resource("metrics://prometheus")
async def metrics_endpoint() -> str:
    """Returns metrics Prometheus."""
    return get_metrics().decode('utf-8')

def main():
    """Start MCP server."""
    logger.info(f"Starting Figma Insight Server v{__version__}")
    if config.server.transport == "stdio":
        logger.info("Transport: stdio")
        mcp.run(transport="stdio")
        return
    logger.info(f"Transport: {config.server.transport}, Host: {config.server.host}, Port: {config.server.port}")
    mcp.run(
        transport=config.server.transport,
        host=config.server.host,
        port=config.server.port
    )
if __name__ == "__main__":
    main()
