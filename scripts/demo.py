#!/usr/bin/env python3
"""
Demo script for the learning assistant.

Runs a few requests through the response cache and call history against
the configured model, so the second identical request can be seen
coming back from the cache.
"""

import asyncio

from learning_assistant import (
    CacheService,
    DeepSeekModelClient,
    HistoryService,
    MemoryCacheRepository,
    MemoryHistoryRepository,
    RequestService,
    RequestType,
    UpstreamError,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_cache_hits(service: RequestService) -> None:
    """Send the same request twice and report provenance."""
    print_section("Response Cache")

    payload = {"topic": "Dynamic programming", "difficulty": "basic", "questionCount": 3}
    reordered = {"questionCount": 3, "difficulty": "basic", "topic": "Dynamic programming"}

    for label, body in (("first request", payload), ("same fields, new order", reordered)):
        outcome = await service.run(RequestType.TEST_GENERATION, body)
        status = "✓ CACHE HIT" if outcome.from_cache else "✗ Cache miss (model called)"
        print(f"\n  {label}: {status}")
        print(f"  Duration: {outcome.duration_ms}ms")
        print(f"  History id: {outcome.history_id}")


async def demo_history(history: HistoryService) -> None:
    """Show the ledger and its summary."""
    print_section("Call History")

    for entry in history.query(limit=10):
        source = "cache" if entry.from_cache else "model"
        print(f"  {entry.request_type.value:<18} {source:<6} {entry.duration_ms}ms")

    stats = history.stats()
    print("\n📊 Stats:")
    print(f"  Entries: {stats['total_entries']}")
    print(f"  Cache hit rate: {stats['cache_hit_rate']:.1f}%")
    print(f"  Average duration: {stats['average_duration_ms']:.0f}ms")


async def run() -> None:
    cache = CacheService.create(repository=MemoryCacheRepository.create())
    history = HistoryService.create(repository=MemoryHistoryRepository.create())
    model_client = DeepSeekModelClient.create()
    service = RequestService.create(
        cache_service=cache, history_service=history, model_client=model_client
    )

    try:
        await demo_cache_hits(service)
        await demo_history(history)
    finally:
        await model_client.close()


def main() -> None:
    """Run all demos."""
    print("\n🚀 Learning Assistant Demo")
    print("=" * 70)

    try:
        asyncio.run(run())

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except UpstreamError as e:
        print(f"\n❌ Error: {e.message}")
        print("\nMake sure DEEPSEEK_API_KEY is set, for example in .env")


if __name__ == "__main__":
    main()
