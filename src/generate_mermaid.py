#!/usr/bin/env python3
"""
Mermaid Generation Tool

Sends text to an OpenAI-compatible chat-completion endpoint, streams the
Mermaid code of the first fenced block to stdout as it arrives and writes
the final diagram to a file.
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

from core.controller import SessionController
from core.events import ChunkEvent, ErrorEvent, FinalEvent
from core.syntax_advisory import advise
from core.upstream import UpstreamSettings, build_messages
from utils.config import Config
from utils.prompts import build_mermaid_system_prompt
from utils.text_utils import clean_text


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate a Mermaid diagram from text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python generate_mermaid.py notes.txt diagram.mmd
  python generate_mermaid.py --text "User logs in, then checks out" --type flowchart
        """
    )

    parser.add_argument(
        'input_file',
        nargs='?',
        help='Input text file path'
    )

    parser.add_argument(
        'output_file',
        nargs='?',
        help='Output .mmd file path (optional)'
    )

    parser.add_argument(
        '--text', '-t',
        help='Input text (alternative to an input file)'
    )

    parser.add_argument(
        '--type',
        dest='diagram_type',
        default='auto',
        choices=['auto', 'flowchart', 'sequence', 'class'],
        help='Diagram type (default: auto)'
    )

    parser.add_argument(
        '--language',
        default=os.getenv('PROMPT_LANGUAGE', 'zh'),
        choices=['zh', 'en'],
        help='System prompt language (default: PROMPT_LANGUAGE or zh)'
    )

    parser.add_argument('--api-url', default=os.getenv('AI_API_URL'), help='Chat-completion base URL')
    parser.add_argument('--api-key', default=os.getenv('AI_API_KEY'), help='API key')
    parser.add_argument('--model', default=os.getenv('AI_MODEL_NAME'), help='Model name')

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    return parser.parse_args(argv)


def validate_arguments(args: argparse.Namespace) -> tuple[str, UpstreamSettings]:
    """Validate arguments and return the input text with resolved settings."""
    if args.text:
        text = args.text
    elif args.input_file:
        input_path = Path(args.input_file)
        if not input_path.exists():
            print(f"Error: Input file does not exist: {input_path}", file=sys.stderr)
            sys.exit(1)
        text = input_path.read_text(encoding='utf-8')
    else:
        print("Error: Input text or file is required", file=sys.stderr)
        sys.exit(1)

    if not text.strip():
        print("Error: Input text is empty", file=sys.stderr)
        sys.exit(1)

    settings = UpstreamSettings(
        api_url=args.api_url or "",
        api_key=args.api_key or "",
        model_name=args.model or "",
    )
    if not settings.is_complete():
        print("Error: API URL, API key and model name are required "
              "(flags or AI_API_URL / AI_API_KEY / AI_MODEL_NAME)", file=sys.stderr)
        sys.exit(1)

    return text, settings


async def run(controller: SessionController, verbose: bool = False) -> Optional[str]:
    """Stream a session to stdout; returns the final code or None on error."""
    async for event in controller.events():
        if isinstance(event, ChunkEvent):
            sys.stdout.write(event.data)
            sys.stdout.flush()
        elif isinstance(event, FinalEvent):
            if verbose:
                print(f"\n\nFinal diagram: {len(event.data)} characters")
            return event.data
        elif isinstance(event, ErrorEvent):
            print(f"\nError: {event.message}", file=sys.stderr)
            return None
    return None


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    text, settings = validate_arguments(args)

    if args.verbose:
        print(f"Settings: {settings!r}")
        print(f"Diagram type: {args.diagram_type}")
        print(f"Configuration: {Config.to_dict()}")

    system_prompt = build_mermaid_system_prompt(
        diagram_type=args.diagram_type,
        language=args.language,
    )
    controller = SessionController(settings, build_messages(system_prompt, clean_text(text)))

    final_code = asyncio.run(run(controller, verbose=args.verbose))
    if final_code is None:
        return 1

    if args.verbose:
        for warning in advise(final_code):
            print(f"Warning: {warning}")

    if args.output_file:
        output_path = Path(args.output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(final_code + "\n", encoding='utf-8')
        if args.verbose:
            print(f"Diagram written to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
