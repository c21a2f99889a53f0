"""Entry point: python -m agents.shopper

Wishlist and keep amounts come from WISHLIST / KEEP, written as
`name=count` pairs separated by commas, e.g. `arrows=20,rations=5`.
"""

import asyncio
import logging
import os
import signal

from agents.shopper.agent import ShopperAgent


def parse_amounts(text: str) -> dict[str, int]:
    amounts: dict[str, int] = {}
    for part in text.split(","):
        if not part.strip():
            continue
        name, _, count = part.partition("=")
        amounts[name.strip()] = int(count)
    return amounts


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    agent = ShopperAgent(
        os.environ.get("PLAYER_ID", "pc-01"),
        nats_url=os.environ.get("NATS_URL", "nats://localhost:4222"),
        wishlist=parse_amounts(os.environ.get("WISHLIST", "")),
        keep=parse_amounts(os.environ.get("KEEP", "")),
    )
    stop = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    await agent.start()
    logging.info("Shopper agent running. Press Ctrl+C to stop.")

    await stop.wait()
    await agent.stop()


if __name__ == "__main__":
    asyncio.run(main())
