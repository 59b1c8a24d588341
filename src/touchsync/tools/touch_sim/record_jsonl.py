from __future__ import annotations

import argparse
import asyncio
import json
import time
from pathlib import Path

import websockets

from touchsync.protocol import ProtocolError, decode_message


def _now_ms() -> int:
    return int(time.time() * 1000)


def _kind(raw: str) -> str:
    try:
        msg = decode_message(raw)
    except ProtocolError:
        return "invalid"
    return msg.type if msg is not None else "unknown"


async def record(ws_url: str, out_path: Path, *, echo: bool) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("a", encoding="utf-8") as f:
        async with websockets.connect(ws_url) as ws:
            async for raw in ws:
                if isinstance(raw, bytes):
                    raw = raw.decode("utf-8", errors="replace")
                kind = _kind(raw)
                if echo:
                    print(f"[record] kind={kind} raw={raw}")
                f.write(json.dumps({"ts": _now_ms(), "kind": kind, "raw": raw}, ensure_ascii=False) + "\n")
                f.flush()


def main() -> None:
    ap = argparse.ArgumentParser(description="Record relay traffic to a JSONL file.")
    ap.add_argument("--ws", required=True, help="WebSocket URL, e.g. ws://127.0.0.1:8000/ws")
    ap.add_argument("--out", required=True, help="Output JSONL path")
    ap.add_argument("--print", action="store_true", help="Print received frames to stdout")
    args = ap.parse_args()

    asyncio.run(record(args.ws, Path(args.out), echo=args.print))


if __name__ == "__main__":
    main()
