from __future__ import annotations

import argparse
import asyncio
import math

from touchsync.client import TouchSyncClient
from touchsync.client.config import ClientSettings
from touchsync.logging_config import setup_logging


def circle_point(t: float, *, cx: float, cy: float, r: float, speed: float) -> tuple[float, float]:
    a = t * speed
    return cx + r * math.cos(a), cy + r * math.sin(a)


async def drag(client: TouchSyncClient, *, duration_s: float, hz: float, cx: float, cy: float, r: float, speed: float) -> None:
    """Wait for the connection, then drag the mouse contact in a circle and release it."""
    while not client.connection.is_open:
        await asyncio.sleep(0.05)

    dt = 1.0 / max(1.0, hz)
    t = 0.0
    client.inputs.mouse_down(*circle_point(t, cx=cx, cy=cy, r=r, speed=speed))
    while t < duration_s:
        await asyncio.sleep(dt)
        t += dt
        client.inputs.mouse_move(*circle_point(t, cx=cx, cy=cy, r=r, speed=speed))
    client.inputs.mouse_up()


async def simulate(settings: ClientSettings, *, clients: int, duration_s: float, hz: float) -> None:
    sims = [TouchSyncClient(settings=settings) for _ in range(clients)]
    runners = [asyncio.create_task(c.run()) for c in sims]
    try:
        await asyncio.gather(
            *(
                drag(
                    c,
                    duration_s=duration_s,
                    hz=hz,
                    cx=200 + 150 * i,
                    cy=300,
                    r=60 + 20 * i,
                    speed=2.0 if i % 2 == 0 else -1.5,
                )
                for i, c in enumerate(sims)
            )
        )
        # Let the final clears flush before closing.
        await asyncio.sleep(0.2)
    finally:
        for c in sims:
            c.stop()
        await asyncio.gather(*runners, return_exceptions=True)


def main() -> None:
    ap = argparse.ArgumentParser(description="Drag simulated pointers in circles through the relay.")
    ap.add_argument("--ws", default=None, help="Relay URL (default: TOUCHSYNC_RELAY_URL)")
    ap.add_argument("--clients", type=int, default=2, help="Number of simulated participants")
    ap.add_argument("--duration", type=float, default=10.0, help="Seconds to drag")
    ap.add_argument("--hz", type=float, default=60.0, help="Move events per second")
    args = ap.parse_args()

    settings = ClientSettings()
    if args.ws:
        settings = settings.model_copy(update={"relay_url": args.ws})
    setup_logging(settings.log_level)

    print(f"[drag_sim] {args.clients} client(s) -> {settings.relay_url} for {args.duration}s")
    asyncio.run(simulate(settings, clients=args.clients, duration_s=args.duration, hz=args.hz))
    print("[drag_sim] done")


if __name__ == "__main__":
    main()
