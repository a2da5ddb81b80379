"""Remove all order desk keys from Redis (useful for testing)."""

import asyncio

from orderdesk.state.manager import StateManager

KEY_PREFIX = "orderdesk:"


async def reset_all_state() -> None:
    """Delete every key the order desk owns, leaving other Redis data alone."""
    print("\n⚠️  WARNING: This will delete ALL catalog items and orders from Redis!")
    response = input("Are you sure? (yes/no): ")

    if response.lower() != "yes":
        print("Cancelled.")
        return

    print("\nResetting state...")

    state_manager = StateManager()
    await state_manager.connect()
    try:
        removed = await state_manager.delete_prefix(KEY_PREFIX)
    finally:
        await state_manager.disconnect()

    print(f"✓ Removed {removed} keys from Redis\n")


if __name__ == "__main__":
    asyncio.run(reset_all_state())
