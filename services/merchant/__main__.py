"""Entry point: python -m services.merchant"""

import asyncio
import logging
import os
import signal

from services.merchant.merchant import MerchantService
from services.merchant.state import SessionState, load_snapshot


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    log = logging.getLogger(__name__)

    nats_url = os.environ.get("NATS_URL", "nats://localhost:4222")
    prompt_timeout = float(os.environ.get("PROMPT_TIMEOUT", "60"))
    session_file = os.environ.get("SESSION_FILE")

    if session_file:
        state = load_snapshot(session_file)
        log.info("Loaded session from %s", session_file)
    else:
        state = SessionState()
        log.warning("SESSION_FILE not set, starting with an empty session")

    merchant = MerchantService(nats_url, state=state, prompt_timeout=prompt_timeout)
    loop = asyncio.get_running_loop()

    # Handle graceful shutdown
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("Shutdown signal received")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    await merchant.start()
    log.info("Merchant is running. Press Ctrl+C to stop.")

    await stop_event.wait()
    await merchant.stop()


if __name__ == "__main__":
    asyncio.run(main())
