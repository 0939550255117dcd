"""Micro benchmark of the relay pipeline (scope, fingerprint, dedup, payload)."""

from __future__ import annotations

import asyncio
import statistics
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from discord_relay.models import InboundMessage as InboundMessageType

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC = PROJECT_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _sample_message(index: int) -> "InboundMessageType":
    from discord_relay.models import InboundMessage, ThreadChannelRef

    attachments = [
        {
            "id": "1",
            "url": "https://cdn.example.com/file.png",
            "filename": "file.png",
            "content_type": "image/png",
            "size": 2048,
        },
        {"id": "2", "url": "https://cdn.example.com/info.txt", "filename": "info.txt", "size": 8192},
    ]
    embeds = [
        {
            "title": "Release notes",
            "description": "All the details about the new version",
            "fields": [{"name": "Feature", "value": "Something big", "inline": True}],
            "footer": {"text": "bench"},
        }
    ]
    return InboundMessage(
        id=str(index),
        channel=ThreadChannelRef("2", parent_id="1"),
        content="foo" * 20,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        author_id="1",
        author_name="Bench",
        attachments=tuple(attachments),
        embeds=tuple(embeds),
    )


def _time(callable_obj: Callable[[], None], iterations: int) -> float:
    start = time.perf_counter()
    for _ in range(iterations):
        callable_obj()
    return time.perf_counter() - start


def benchmark_payload(iterations: int) -> None:
    from discord_relay.normalize import build_relay_payload

    message = _sample_message(1)
    for _ in range(iterations):
        build_relay_payload(message, secret="bench").to_dict()


async def benchmark_pipeline(iterations: int) -> None:
    from discord_relay.app import RelayApp
    from discord_relay.config import RelaySettings
    from discord_relay.models import RelayPayload, RelayResult

    class _NoopRelay:
        async def send(self, payload: RelayPayload) -> RelayResult:
            return RelayResult(ok=True, status=200)

    settings = RelaySettings(
        discord_token="bench",
        channel_id="1",
        relay_url="https://relay.example/exec",
        dedup_capacity=max(1, iterations // 2),
    )
    app = RelayApp(settings, relay=_NoopRelay())  # type: ignore[arg-type]
    for index in range(iterations):
        await app.handle_message(_sample_message(index))


def main() -> None:
    iterations = 5_000

    def run_payload() -> None:
        benchmark_payload(1)

    def run_pipeline() -> None:
        asyncio.run(benchmark_pipeline(iterations))

    payload_times = [_time(run_payload, iterations) for _ in range(5)]
    pipeline_times = [_time(run_pipeline, 1) for _ in range(5)]

    print("Benchmark results (smaller is better)")
    print("Iterations per batch:", iterations)
    print()
    print(f"Payload average:  {statistics.mean(payload_times):.4f}s")
    print(f"Payload stdev:    {statistics.pstdev(payload_times):.4f}s")
    print(f"Pipeline average: {statistics.mean(pipeline_times):.4f}s")
    print(f"Pipeline stdev:   {statistics.pstdev(pipeline_times):.4f}s")


if __name__ == "__main__":
    main()
