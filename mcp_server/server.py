"""
MCP Server — Exposes widget timelines and business health metrics
as discoverable tools for assistants and automation.

Tools:
- get_widget_timeline: Scheduled widget entries for a configuration
- get_business_health: Business health sections as metric cards
"""

import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from business_dashboard.service import DashboardService
from metrics_widget import DataUnavailable, DisplayConfiguration, SchedulingError, TimelineProvider
from metrics_widget.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create MCP server
server = Server("sweeply-dashboard")

# Shared instances
timeline_provider = TimelineProvider()
dashboard_service = DashboardService()


@server.list_tools()
async def list_tools() -> list[Tool]:
    """Advertise available tools to MCP clients."""
    return [
        Tool(
            name="get_widget_timeline",
            description=(
                "Build the home-screen widget timeline: the entries the widget "
                "will show, each with a timestamp, the active metric (customers "
                "or tasks) and the metrics snapshot, plus when to refresh."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "display_mode": {
                        "type": "string",
                        "enum": ["Customers", "Tasks", "Alternating"],
                        "description": "Which metric the widget shows (default Alternating)",
                    },
                    "color_theme": {
                        "type": "string",
                        "enum": ["Blue", "Green", "Teal"],
                        "description": "Widget color theme (default Blue)",
                    },
                },
            },
        ),
        Tool(
            name="get_business_health",
            description=(
                "Business health metrics grouped as this week, monthly overview "
                "and year-to-date, each card with value, period and trend."
            ),
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls from MCP clients."""
    arguments = arguments or {}

    if name == "get_widget_timeline":
        configuration = DisplayConfiguration(
            display_mode=arguments.get("display_mode"),
            color_theme=arguments.get("color_theme"),
        )
        try:
            timeline = await timeline_provider.timeline(configuration)
        except (DataUnavailable, SchedulingError) as e:
            logger.error("get_widget_timeline failed: %s", e, exc_info=True)
            return [TextContent(type="text", text=f"Error: {str(e)}")]

        response = timeline.model_dump(mode="json")
        response["refresh_at"] = timeline.refresh_at.isoformat()
        return [
            TextContent(
                type="text",
                text=json.dumps(response, indent=2, default=str),
            )
        ]

    elif name == "get_business_health":
        try:
            sections = await dashboard_service.business_health_sections()
        except Exception as e:
            logger.error("get_business_health failed: %s", e, exc_info=True)
            return [TextContent(type="text", text=f"Error: {str(e)}")]

        return [
            TextContent(
                type="text",
                text=json.dumps([s.model_dump(mode="json") for s in sections], indent=2),
            )
        ]

    return [TextContent(type="text", text=f"Unknown tool: {name}")]


async def main():
    """Run the MCP server over stdio."""
    logger.info("MCP Server starting (stdio mode)")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
