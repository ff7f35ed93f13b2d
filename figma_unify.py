#!/usr/bin/env python3
"""
Figma -> Unify MCP Server - converts Figma radio/checkbox components into Unify schema.

This server provides tools to:
- Fetch a Figma design document through the Unify Fetch-Figma-Details endpoint
- Convert a fetched document into a Unify RadioButton component record
- Map colors, sizes, spacing and typography onto Unify design tokens

It also runs as a command line tool (fetch / convert / run / serve).
"""

import argparse
import asyncio
import json
import os
import re
import sys
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from mcp.server.fastmcp import FastMCP

from converters import ConversionError, ConversionOverrides, convert_radio_button
from converters.logger import get_logger

LOGGER = get_logger("figma_unify")

# ============================================================================
# Constants
# ============================================================================

UNIFY_API_URL = "https://api.qa.unifyapps.com/api-endpoint/figma/Fetch-Figma-Details"
DEFAULT_FIGMA_URL = "https://www.figma.com/design/4r7C2sI9cktH4T8atJhmrW/Component-Sheet?node-id=1-5780"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RAW_PATH = "figma.json"
DEFAULT_OUTPUT_PATH = "unify.json"

# ============================================================================
# Initialize MCP Server
# ============================================================================

mcp = FastMCP("figma_unify")

# ============================================================================
# Enums and Types
# ============================================================================

class ResponseFormat(str, Enum):
    """Output format for tool responses."""
    MARKDOWN = "markdown"
    JSON = "json"


# ============================================================================
# Pydantic Input Models
# ============================================================================

def _validate_figma_url(v: str) -> str:
    if not re.search(r'figma\.com/(?:design|file)/[a-zA-Z0-9]+', v):
        raise ValueError("Expected a Figma design URL (figma.com/design/FILE_KEY/...)")
    return v


class FigmaFetchInput(BaseModel):
    """Input model for fetching a raw Figma document."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    file_url: str = Field(
        ...,
        description="Figma design URL, including the node-id query parameter",
        min_length=1
    )
    output_path: str = Field(
        default=DEFAULT_RAW_PATH,
        description="Where to save the raw Figma JSON"
    )

    @field_validator('file_url')
    @classmethod
    def validate_file_url(cls, v: str) -> str:
        return _validate_figma_url(v)


class UnifyConvertInput(BaseModel):
    """Input model for radio button conversion."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    input_path: str = Field(
        default=DEFAULT_RAW_PATH,
        description="Raw Figma JSON to convert (written by the fetch step)"
    )
    output_path: str = Field(
        default=DEFAULT_OUTPUT_PATH,
        description="Where to save the Unify JSON"
    )
    file_url: Optional[str] = Field(
        default=None,
        description="Optional Figma URL; when given the document is fetched first"
    )
    overrides: ConversionOverrides = Field(
        default_factory=ConversionOverrides,
        description="Optional id, displayName, label, description, defaultValue"
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.JSON,
        description="Output format: 'markdown' or 'json'"
    )

    @field_validator('file_url')
    @classmethod
    def validate_file_url(cls, v: Optional[str]) -> Optional[str]:
        return _validate_figma_url(v) if v else None


# ============================================================================
# Helper Functions
# ============================================================================

def _get_unify_api_url() -> str:
    """Get the Fetch-Figma-Details endpoint, overridable from the environment."""
    return os.environ.get("UNIFY_API_URL", UNIFY_API_URL)


def _get_default_figma_url() -> str:
    return os.environ.get("FIGMA_FILE_URL", DEFAULT_FIGMA_URL)


async def fetch_figma_document(
    file_url: str,
    api_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Dict[str, Any]:
    """POST the Figma URL to the Unify endpoint and return the parsed document."""
    async with httpx.AsyncClient(transport=transport) as client:
        response = await client.post(
            api_url or _get_unify_api_url(),
            json={"fileUrl": file_url},
            headers={"Content-Type": "application/json"},
            timeout=DEFAULT_TIMEOUT
        )
        response.raise_for_status()
        return response.json()


def load_json(path: str) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_json(path: str, data: Dict[str, Any]) -> None:
    """Write data as indented UTF-8 JSON, creating parent directories."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def _handle_api_error(e: Exception) -> str:
    """Format fetch, file and conversion errors for user-friendly messages."""
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        if status == 401:
            return "Error: The Unify endpoint rejected the request as unauthorized."
        elif status == 404:
            return "Error: Figma file or node not found. Check the design URL."
        elif status == 429:
            return "Error: Rate limit exceeded. Please wait before making more requests."
        return f"Error: HTTP error! Status: {status}"
    elif isinstance(e, httpx.TimeoutException):
        return "Error: Request timed out while fetching the Figma document."
    elif isinstance(e, httpx.RequestError):
        return f"Error: Could not reach the Unify endpoint: {e}"
    elif isinstance(e, json.JSONDecodeError):
        return f"Error: Invalid JSON: {e.msg} (line {e.lineno})"
    elif isinstance(e, FileNotFoundError):
        return f"Error: File not found: {e.filename}"
    elif isinstance(e, OSError):
        return f"Error: {type(e).__name__}: {str(e)}"
    elif isinstance(e, ValueError):
        return f"Error: {str(e)}"
    return f"Error: {type(e).__name__}: {str(e)}"


def _record_summary_markdown(record: Dict[str, Any]) -> str:
    """Render a component record as a short markdown summary."""
    component_id, entry = next(iter(record.items()))
    component = entry['component']
    appearance = component['appearance']
    styles = appearance['styles']
    content = component['content']

    lines = [
        f"# {entry['displayName']}",
        f"**Id:** `{component_id}`  ",
        f"**Type:** {component['componentType']}  ",
        f"**Visible:** {entry['visibility']['value']}",
        "",
        "| Field | Value |",
        "|-------|-------|",
        f"| size | `{appearance['size']}` |",
        f"| label | {content.get('label', '')} (`{appearance['label']['variant']}`, "
        f"`{appearance['label']['weight']}`, {appearance['label']['color']}) |",
        f"| description | {content.get('description', '')} (`{appearance['description']['variant']}`, "
        f"`{appearance['description']['weight']}`, {appearance['description']['color']}) |",
        f"| checked | {content['checked']} |",
        f"| background | {styles['backgroundColor']} |",
        f"| border | {styles['borderColor']} `{styles['borderWidth']['all']}` |",
        f"| size (px) | {styles['width']} x {styles['height']} |",
    ]
    if 'padding' in styles:
        lines.append(f"| padding | `{json.dumps(styles['padding'])}` |")
    if entry['dpOn']:
        events = ', '.join(f"{a['event']}->{a['action']}" for a in entry['dpOn'])
        lines.append(f"| actions | {events} |")
    return "\n".join(lines)


# ============================================================================
# MCP Tools
# ============================================================================

@mcp.tool(
    name="unify_fetch_figma_document",
    annotations={
        "title": "Fetch Figma Document",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def unify_fetch_figma_document(params: FigmaFetchInput) -> str:
    """
    Fetch a Figma design document through the Unify endpoint and save it.

    Args:
        params: FigmaFetchInput containing:
            - file_url (str): Figma design URL with node-id
            - output_path (str): Where to write the raw JSON

    Returns:
        str: JSON status message, or an error message
    """
    try:
        document = await fetch_figma_document(params.file_url)
        save_json(params.output_path, document)
        return json.dumps({
            "status": "success",
            "output_path": params.output_path,
            "message": f"Figma data saved to {params.output_path}"
        }, indent=2)

    except Exception as e:
        return _handle_api_error(e)


@mcp.tool(
    name="unify_convert_radio_button",
    annotations={
        "title": "Convert Figma Radio Button to Unify",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True
    }
)
async def unify_convert_radio_button(params: UnifyConvertInput) -> str:
    """
    Convert a Figma radio button / checkbox into a Unify component record.

    Reads the raw document from input_path (fetching it first when file_url
    is given), maps it to Unify tokens and saves the record to output_path.

    Args:
        params: UnifyConvertInput containing:
            - input_path (str): Raw Figma JSON
            - output_path (str): Where to write the Unify JSON
            - file_url (Optional[str]): Fetch this design first
            - overrides: id, displayName, label, description, defaultValue
            - response_format: 'markdown' or 'json'

    Returns:
        str: The component record or its summary, or an error message
    """
    try:
        if params.file_url:
            document = await fetch_figma_document(params.file_url)
            save_json(params.input_path, document)
        else:
            document = load_json(params.input_path)

        record = convert_radio_button(document, params.overrides)
        save_json(params.output_path, record)

        if params.response_format == ResponseFormat.MARKDOWN:
            return _record_summary_markdown(record)
        return json.dumps(record, indent=2, ensure_ascii=False)

    except Exception as e:
        return _handle_api_error(e)


# ============================================================================
# Command Line
# ============================================================================

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="figma-unify",
        description="Convert Figma radio button / checkbox components into Unify JSON"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Fetch the raw Figma document")
    fetch.add_argument("--url", default=None, help="Figma design URL (default: $FIGMA_FILE_URL)")
    fetch.add_argument("--output", default=DEFAULT_RAW_PATH, help="Raw JSON path")

    for name, help_text in (("convert", "Convert a fetched document"),
                            ("run", "Fetch then convert")):
        cmd = sub.add_parser(name, help=help_text)
        if name == "run":
            cmd.add_argument("--url", default=None, help="Figma design URL (default: $FIGMA_FILE_URL)")
        cmd.add_argument("--input", default=DEFAULT_RAW_PATH, help="Raw JSON path")
        cmd.add_argument("--output", default=DEFAULT_OUTPUT_PATH, help="Unify JSON path")
        cmd.add_argument("--id", default=None, help="Component id")
        cmd.add_argument("--display-name", default=None, help="Component display name")
        cmd.add_argument("--label", default=None, help="Label text")
        cmd.add_argument("--description", default=None, help="Description text")
        cmd.add_argument("--default-value", default=None, help="Default value")

    sub.add_parser("serve", help="Run the MCP server over stdio")
    return parser


def _overrides_from_args(args: argparse.Namespace) -> ConversionOverrides:
    return ConversionOverrides(
        id=args.id,
        display_name=args.display_name,
        label=args.label,
        description=args.description,
        default_value=args.default_value,
    )


def _fetch(url: str, output: str) -> None:
    params = FigmaFetchInput(file_url=url, output_path=output)
    document = asyncio.run(fetch_figma_document(params.file_url))
    save_json(params.output_path, document)
    LOGGER.info("Figma data saved to %s", params.output_path)


def _convert(args: argparse.Namespace) -> None:
    document = load_json(args.input)
    record = convert_radio_button(document, _overrides_from_args(args))
    save_json(args.output, record)
    LOGGER.info("Unify output saved to %s", args.output)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit status."""
    args = _build_parser().parse_args(argv)

    if args.command == "serve":
        mcp.run()
        return 0

    try:
        if args.command in ("fetch", "run"):
            _fetch(args.url or _get_default_figma_url(),
                   args.output if args.command == "fetch" else args.input)
        if args.command in ("convert", "run"):
            _convert(args)
    except (ValidationError, ConversionError, httpx.HTTPError, OSError, ValueError) as e:
        LOGGER.error(_handle_api_error(e))
        return 1
    return 0


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == "__main__":
    sys.exit(main())
