#!/usr/bin/env python3
"""Streaming examples for the LLMWise SDK."""

from llmwise import LLMWise, LLMWiseError


def main():
    client = LLMWise()

    print("=== Streaming Chat ===")
    print("Prompt: Write a haiku about programming.")
    print("\nResponse:")
    print("-" * 40)

    try:
        for event in client.chat_stream(
            model="auto",
            messages=[{"role": "user", "content": "Write a haiku about programming."}],
            temperature=0.9,
        ):
            if event.delta:
                print(event.delta, end="", flush=True)
            if event.done:
                print(f"\n[credits charged: {event.credits_charged}]")

        print("-" * 40)
        print("Stream complete!")

    except LLMWiseError as e:
        print(f"\nError: {e}")

    print("\n=== Streaming Blend ===")
    try:
        for event in client.blend_stream(
            models=["gpt-4o-mini", "claude-haiku-4.5", "gemini-2.5-flash"],
            messages=[{"role": "user", "content": "Explain recursion in one sentence."}],
            strategy="consensus",
        ):
            if event.event:
                print(f"\n<{event.event}>", end="")
            if event.delta:
                print(event.delta, end="", flush=True)
        print()
    except LLMWiseError as e:
        print(f"\nError: {e}")

    client.close()


if __name__ == "__main__":
    main()
