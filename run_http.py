"""HTTP runner for MCP server (remote deployment)."""
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.server import TransportSecuritySettings
from frankenbite_mcp.server import (
    app_lifespan,
    load_transcript,
    load_youtube_transcript,
    search_phrases,
    search_word,
    list_transcripts,
    get_search_history,
    help_resource,
    READ_ONLY,
    STORES_TRANSCRIPT,
)

server = FastMCP(
    "Frankenbite Finder",
    instructions="Find exact quotes or assemble frankenbites from timecoded transcripts",
    lifespan=app_lifespan,
    host="0.0.0.0",
    port=8402,
    transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
)

# Register tools with annotations
server.tool(annotations=STORES_TRANSCRIPT)(load_transcript)
server.tool(annotations={**STORES_TRANSCRIPT, "openWorldHint": True})(load_youtube_transcript)
server.tool(annotations=READ_ONLY)(search_phrases)
server.tool(annotations=READ_ONLY)(search_word)
server.tool(annotations=READ_ONLY)(list_transcripts)
server.tool(annotations=READ_ONLY)(get_search_history)

# Register resources
server.resource("frankenbite://help")(help_resource)

server.run(transport="streamable-http")
