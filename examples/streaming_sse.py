"""
Example: Streaming Server-Sent Events

Streams an SSE endpoint, prints each event as it arrives and cancels the
stream after a few seconds. Point STREAM_SDK_BASE_URL (or the URL below)
at any endpoint that answers with ``text/event-stream``.
"""

import asyncio

from stream_request_sdk import CancellationToken, StreamSettings, create_client


async def example_sse_events():
    """Print parsed events from an SSE endpoint."""
    print("=== SSE Events ===\n")

    settings = StreamSettings.from_env()
    async with create_client(settings=settings) as client:
        handle = client.stream_sse(
            url="https://sse.dev/test",
            retry=2,
            retry_delay=0.5,
            on_event=lambda event: print(f"[{event.event or 'message'}] {event.data}"),
            on_complete=lambda: print("\nStream finished"),
            on_error=lambda error: print(f"\nStream ended: {error}"),
        )

        # Stop after three seconds; the endpoint never ends on its own
        await asyncio.sleep(3)
        handle()
        await handle


async def example_external_signal():
    """Cancel a raw text stream from outside through a shared token."""
    print("\n=== External Cancellation ===\n")

    signal = CancellationToken()
    async with create_client() as client:
        handle = client.stream(
            url="https://sse.dev/test",
            signal=signal,
            on_chunk=lambda text: print(text, end="", flush=True),
            on_error=lambda error: print(f"\nStream ended: {error}"),
        )

        asyncio.get_running_loop().call_later(2, signal.fire)
        await handle


async def main():
    await example_sse_events()
    await example_external_signal()


if __name__ == "__main__":
    asyncio.run(main())
