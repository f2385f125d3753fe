#!/usr/bin/env python3
"""Basic usage examples for the LLMWise SDK.

Reads the API key from LLMWISE_API_KEY.
"""

from llmwise import LLMWise


def main():
    with LLMWise() as client:
        print("=== Models ===")
        models = client.models()
        print(f"{len(models)} models available")

        print("\n=== Credits ===")
        balance = client.credits_balance()
        print(f"Balance: {balance}")

        print("\n=== Chat ===")
        response = client.chat(
            model="auto",
            messages=[{"role": "user", "content": "What is the capital of France?"}],
            max_tokens=50,
            optimization_goal="cost",
        )
        print(f"Model: {response.resolved_model or response.model}")
        print(f"Response: {response.content}")
        print(f"Credits charged: {response.credits_charged}")

        print("\n=== Compare ===")
        comparison = client.compare(
            models=["gpt-4o-mini", "claude-haiku-4.5"],
            messages=[{"role": "user", "content": "Name three prime numbers."}],
        )
        for item in comparison.responses:
            print(f"  {item.model}: {item.content} ({item.latency_ms} ms)")
        if comparison.summary:
            print(f"Fastest: {comparison.summary.fastest}")


if __name__ == "__main__":
    main()
