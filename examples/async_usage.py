#!/usr/bin/env python3
"""Async usage examples for the LLMWise SDK."""

import asyncio

from llmwise import AsyncLLMWise


async def print_stream(client: AsyncLLMWise, prompt: str) -> None:
    async for event in client.chat_stream(
        model="auto",
        messages=[{"role": "user", "content": prompt}],
    ):
        if event.delta:
            print(event.delta, end="", flush=True)
    print()


async def main():
    async with AsyncLLMWise() as client:
        print("=== Parallel Requests ===")
        results = await asyncio.gather(
            client.credits_balance(),
            client.usage_summary(days=7),
            client.keys_info(),
            return_exceptions=True,
        )
        for name, result in zip(("balance", "usage", "keys"), results):
            if isinstance(result, Exception):
                print(f"  {name}: Error - {result}")
            else:
                print(f"  {name}: {result}")

        # The SDK sets no timeout; bound the call from outside
        print("\n=== Streaming with a deadline ===")
        try:
            await asyncio.wait_for(print_stream(client, "Count from 1 to 5."), timeout=30)
        except asyncio.TimeoutError:
            print("\nCancelled after 30s")
        except Exception as e:
            print(f"Error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
