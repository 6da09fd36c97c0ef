"""CLI entry point for Stream Request SDK."""

import argparse
import asyncio
import json
import logging
import signal
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .config.settings import StreamSettings
from .http.client import create_client
from .models.events import SSEEvent


def parse_headers(values: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``["Name: value", ...]`` into a header dict."""
    headers = {}
    for value in values or []:
        name, sep, content = value.partition(":")
        if not sep:
            raise ValueError(f"Invalid header {value!r}, expected 'Name: value'")
        headers[name.strip()] = content.strip()
    return headers


async def stream_url(url: str, sse: bool = False, method: str = "GET",
                     headers: Optional[Dict[str, str]] = None,
                     body: Optional[str] = None,
                     retry: Optional[int] = None,
                     retry_delay: Optional[float] = None) -> int:
    """Stream a URL to stdout; returns a process exit code."""
    settings = StreamSettings.from_env()
    config = {"url": url, "method": method, "headers": headers or None}
    if body is not None:
        config["content"] = body
    if retry is not None:
        config["retry"] = retry
    if retry_delay is not None:
        config["retry_delay"] = retry_delay

    failures = []

    def on_chunk(text: str):
        print(text, end='', flush=True)

    def on_event(event: SSEEvent):
        print(json.dumps(event.to_dict()), flush=True)

    def on_error(error):
        failures.append(error)
        print(f"\nError: {error}")

    async with create_client(settings=settings) as client:
        if sse:
            handle = client.stream_sse(config, on_event=on_event, on_error=on_error)
        else:
            handle = client.stream(config, on_chunk=on_chunk, on_error=on_error)

        loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(signal.SIGINT, handle.cancel)
            installed = True
        except (NotImplementedError, RuntimeError):
            # No signal handlers on Windows loops or outside the main thread
            installed = False

        try:
            await handle
        finally:
            if installed:
                loop.remove_signal_handler(signal.SIGINT)
    return 1 if failures else 0


def main():
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Stream Request SDK CLI")
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    stream_parser = subparsers.add_parser('stream', help='Stream a URL to stdout')
    stream_parser.add_argument('url', help='URL to stream')
    stream_parser.add_argument('--sse', action='store_true', help='Parse the body as Server-Sent Events')
    stream_parser.add_argument('--method', '-X', default='GET', help='HTTP method')
    stream_parser.add_argument('--header', '-H', action='append', help='Request header ("Name: value")')
    stream_parser.add_argument('--data', '-d', help='Request body')
    stream_parser.add_argument('--retry', type=int, help='Retry attempts for failed requests')
    stream_parser.add_argument('--retry-delay', type=float, help='Seconds between retry attempts')

    args = parser.parse_args()
    load_dotenv()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == 'stream':
        try:
            headers = parse_headers(args.header)
        except ValueError as e:
            parser.error(str(e))
        return asyncio.run(stream_url(
            args.url,
            sse=args.sse,
            method=args.method,
            headers=headers,
            body=args.data,
            retry=args.retry,
            retry_delay=args.retry_delay
        ))

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
