#!/usr/bin/env python3
"""Error handling examples for the LLMWise SDK."""

import pydantic

from llmwise import LLMWise, LLMWiseError


def main():
    client = LLMWise()

    print("=== Error Handling Examples ===\n")

    # Example 1: Unknown model
    print("1. Testing with invalid model...")
    try:
        client.chat(
            model="non-existent-model",
            messages=[{"role": "user", "content": "Hello"}],
        )
    except LLMWiseError as e:
        print(f"   LLMWiseError: {e.message}")
        print(f"   Status code: {e.status}")
        print(f"   Payload: {e.payload}")

    # Example 2: Rejected locally before sending
    print("\n2. Testing with an out-of-range temperature...")
    try:
        client.chat(
            model="auto",
            messages=[{"role": "user", "content": "Hello"}],
            temperature=5,
        )
    except pydantic.ValidationError as e:
        print(f"   ValidationError: {e.error_count()} error(s)")

    # Example 3: Invalid API key
    print("\n3. Testing with invalid API key...")
    with LLMWise(api_key="invalid-key") as bad_client:
        try:
            bad_client.credits_balance()
        except LLMWiseError as e:
            if e.status in (401, 403):
                print("   Handle: Re-authenticate or check API key")
            else:
                print(f"   Error: {e}")

    # Example 4: Generic pattern by status
    print("\n4. Generic error handling pattern...")
    try:
        client.get_conversation("does-not-exist")
    except LLMWiseError as e:
        if e.status == 404:
            print("   Handle: Conversation not found")
        elif e.status == 402:
            print("   Handle: Top up credits")
        elif e.status == 429:
            print("   Handle: Slow down and retry later")
        elif e.status >= 500:
            print("   Handle: Retry with backoff or alert ops")
        else:
            print(f"   Handle: Generic error - {e}")

    client.close()
    print("\nDone!")


if __name__ == "__main__":
    main()
