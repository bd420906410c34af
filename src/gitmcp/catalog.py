"""The tools git-mcp advertises, in the order clients see them."""

from __future__ import annotations

from gitmcp.protocol.models import ToolDescriptor, ToolProperty
from gitmcp.protocol.registry import ToolRegistry

GET_TAGS = ToolDescriptor(
    name="get_tags",
    description=(
        "Call this tool BEFORE writing any dependency in Cargo.toml/package.json. "
        "Returns the latest versions. Use 'limit: 5' to avoid fetching old tags."
    ),
    properties=(
        ToolProperty(name="url", required=True, default=""),
        ToolProperty(
            name="limit",
            type="integer",
            description=(
                "Number of latest tags to return. Default returns ALL "
                "(avoid this for large repos)."
            ),
        ),
    ),
)

GET_CHANGELOG = ToolDescriptor(
    name="get_changelog",
    description=(
        "Analyze commit messages between versions to identify breaking changes, "
        "deprecated features, or migration guides."
    ),
    properties=(
        ToolProperty(name="url", required=True, default=""),
        ToolProperty(name="start_tag", required=True, default=""),
        ToolProperty(name="end_tag", required=True, default=""),
    ),
)

GET_README = ToolDescriptor(
    name="get_readme",
    description=(
        "Read the README to find installation instructions and basic usage examples "
        "that are compatible with the fetched version."
    ),
    properties=(ToolProperty(name="url", required=True, default=""),),
)

GET_FILE_TREE = ToolDescriptor(
    name="get_file_tree",
    description=(
        "Explore the repository structure. Look for 'examples/' or 'tests/' folders "
        "to find up-to-date code patterns."
    ),
    properties=(
        ToolProperty(name="url", required=True, default=""),
        ToolProperty(name="branch"),
    ),
)

GET_FILE_CONTENT = ToolDescriptor(
    name="get_file_content",
    description=(
        "Read content of source files (especially in 'examples/'). Use this to verify "
        "API syntax and ensure the code you write matches the library version."
    ),
    properties=(
        ToolProperty(name="url", description="Repository URL", required=True, default=""),
        ToolProperty(
            name="path",
            description="Path to the file (e.g., 'src/main.cpp' or 'module.prop')",
            required=True,
            default="",
        ),
        ToolProperty(
            name="branch",
            description="Branch name or Tag (e.g., 'v1.0.0'). Defaults to HEAD/main.",
        ),
    ),
)

SEARCH_CODE = ToolDescriptor(
    name="search_code",
    description=(
        "Search the repository's code for a symbol or phrase to locate where an API "
        "is defined or used. Requires a GitHub token."
    ),
    properties=(
        ToolProperty(name="url", description="Repository URL", required=True, default=""),
        ToolProperty(
            name="query",
            description="Search terms (GitHub code search syntax).",
            required=True,
            default="",
        ),
        ToolProperty(
            name="limit",
            type="integer",
            description="Maximum number of matches to return (default 30, max 100).",
        ),
    ),
)

TOOLS: tuple[ToolDescriptor, ...] = (
    GET_TAGS,
    GET_CHANGELOG,
    GET_README,
    GET_FILE_TREE,
    GET_FILE_CONTENT,
    SEARCH_CODE,
)


def default_registry() -> ToolRegistry:
    """Build the registry holding every git-mcp tool."""
    return ToolRegistry(TOOLS)
