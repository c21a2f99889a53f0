"""Proof of Life — run a few trades over the Tradepost message bus.

Run with: python scripts/proof_of_life.py
Requires: NATS running (NATS_URL, default nats://localhost:4222)
"""

import asyncio
import os
import sys
from pathlib import Path

from tradepost import currency

from agents.shopper.agent import ShopperAgent
from services.merchant.merchant import MerchantService
from services.merchant.state import load_snapshot

SESSION_FILE = Path(__file__).with_name("demo_session.json")


async def _wait_for_results(agent: ShopperAgent, count: int, timeout: float = 5.0) -> bool:
    async def _poll() -> None:
        while len(agent.state.results) < count:
            await asyncio.sleep(0.1)

    try:
        await asyncio.wait_for(_poll(), timeout=timeout)
    except asyncio.TimeoutError:
        return False
    return True


async def main() -> None:
    nats_url = os.environ.get("NATS_URL", "nats://localhost:4222")
    state = load_snapshot(SESSION_FILE)
    merchant = MerchantService(nats_url, state=state, prompt_timeout=5.0)
    shopper = ShopperAgent("pc-01", nats_url=nats_url, wishlist={"Arrows": 20})

    print("=" * 60)
    print("  TRADEPOST — Proof of Life")
    print("=" * 60)
    print()

    print("[1/5] Starting merchant and shopper...", end=" ")
    await merchant.start()
    await shopper.start()
    await asyncio.sleep(0.5)
    print(f"OK ({nats_url})")

    print("[2/5] Vex buys 20 arrows from Old Hobb...")
    await shopper.purchase("merchant-01", "arrows-01")

    print("[3/5] Vex buys a longsword...")
    await shopper.purchase("merchant-01", "longsword-01")

    print("[4/5] Vex tries to sell a moonstone Old Hobb can't afford...")
    await shopper.sell("merchant-01", "gem-01")

    print("[5/5] Waiting for results...")
    ok = await _wait_for_results(shopper, 3)
    for result in shopper.state.results:
        print(f"       [{result.type}] {result.msg}")

    player = state.get_actor("pc-01")
    if player is not None:
        print(f"       Vex now holds {currency.to_string(currency.from_actor(player))}")

    await shopper.stop()
    await merchant.stop()

    if not ok:
        print(f"       Timeout! Only received {len(shopper.state.results)} results")
        sys.exit(1)

    print()
    print("=" * 60)
    print("  SUCCESS! The merchant is open for business.")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
