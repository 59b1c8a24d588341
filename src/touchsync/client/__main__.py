from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from touchsync.logging_config import setup_logging

from .config import ClientSettings
from .context import TouchSyncClient
from .models import Status
from .rendering import render_frame


async def _render_loop(client: TouchSyncClient, out_path: Path, size: tuple[int, int], fps: float) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    while True:
        img = render_frame(local=client.local.snapshot(), remote=client.remote.snapshot_all(), size=size)
        img.save(out_path, format="PNG")
        await asyncio.sleep(1.0 / max(0.1, fps))


async def run(settings: ClientSettings, snapshot: Path | None, size: tuple[int, int], fps: float) -> None:
    client = TouchSyncClient(settings=settings)
    last: list[Status] = []

    def on_status(status: Status) -> None:
        if last and last[-1] == status:
            return
        last[:] = [status]
        print(f"[client] {status.connection} | active users: {status.active_count} | color: {status.color}")

    client.sync.add_status_listener(on_status)

    render_task = None
    if snapshot is not None:
        render_task = asyncio.create_task(_render_loop(client, snapshot, size, fps))
    try:
        await client.run()
    finally:
        if render_task is not None:
            render_task.cancel()


def main() -> None:
    ap = argparse.ArgumentParser(description="Headless touchsync participant: tracks remote touches and reports status.")
    ap.add_argument("--url", default=None, help="Relay URL, e.g. ws://127.0.0.1:8000/ws (default: TOUCHSYNC_RELAY_URL)")
    ap.add_argument("--snapshot", default=None, help="If set, periodically render the shared canvas to this PNG")
    ap.add_argument("--width", type=int, default=800)
    ap.add_argument("--height", type=int, default=600)
    ap.add_argument("--fps", type=float, default=2.0, help="Snapshot render rate")
    args = ap.parse_args()

    settings = ClientSettings()
    if args.url:
        settings = settings.model_copy(update={"relay_url": args.url})
    setup_logging(settings.log_level)

    try:
        asyncio.run(
            run(
                settings,
                Path(args.snapshot) if args.snapshot else None,
                (args.width, args.height),
                args.fps,
            )
        )
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
