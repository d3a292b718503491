"""A chat server that relays each client's lines to every connected client."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import sys
from typing import AsyncIterator, Optional

_CLOSED = object()


def _address(writer: asyncio.StreamWriter) -> str:
    """Return the remote address of a connection as "host:port"."""
    peer = writer.get_extra_info("peername")
    if isinstance(peer, tuple) and len(peer) >= 2:
        host, port = peer[0], peer[1]
        if ":" in str(host):
            return f"[{host}]:{port}"
        return f"{host}:{port}"
    return str(peer) if peer else "unknown"


async def _lines(reader: asyncio.StreamReader) -> AsyncIterator[str]:
    """Yield the lines read from reader, without their line endings."""
    while True:
        try:
            line = await reader.readline()
        except (ValueError, ConnectionError):
            return
        if not line:
            return
        yield line.decode("utf-8", "replace").removesuffix("\n").removesuffix("\r")


class ChatServer:
    """Relays every message a client sends to all connected clients."""

    def __init__(self) -> None:
        self._clients: set = set()

    def broadcast(self, msg: str) -> int:
        """Queue msg for every connected client; return how many received it."""
        clients = list(self._clients)
        for outgoing in clients:
            outgoing.put_nowait(msg)
        return len(clients)

    async def _client_writer(
        self, writer: asyncio.StreamWriter, outgoing: asyncio.Queue
    ) -> None:
        broken = False
        while (msg := await outgoing.get()) is not _CLOSED:
            if broken:
                continue
            try:
                writer.write((msg + "\n").encode("utf-8"))
                await writer.drain()
            except ConnectionError:
                broken = True  # network errors are ignored

    async def handle_conn(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        """Serve one client until it disconnects."""
        outgoing: asyncio.Queue = asyncio.Queue()
        sender = asyncio.create_task(self._client_writer(writer, outgoing))
        who = _address(writer)
        outgoing.put_nowait("You are " + who)
        self.broadcast(who + " has arrived")
        self._clients.add(outgoing)
        try:
            async for text in _lines(reader):
                self.broadcast(f"{who}: {text}")
        finally:
            self._clients.discard(outgoing)
            outgoing.put_nowait(_CLOSED)
            self.broadcast(who + " has left")
            with contextlib.suppress(Exception):
                await sender
            writer.close()
            with contextlib.suppress(ConnectionError):
                await writer.wait_closed()

    async def serve(self, host: str = "localhost", port: int = 8000) -> None:
        """Accept chat clients on host:port forever."""
        server = await asyncio.start_server(self.handle_conn, host, port)
        async with server:
            await server.serve_forever()


def main(argv: Optional[list] = None) -> int:
    """Run a chat server."""
    parser = argparse.ArgumentParser(prog="chat", description=main.__doc__)
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    try:
        asyncio.run(ChatServer().serve(args.host, args.port))
    except KeyboardInterrupt:
        return 0
    except OSError as err:
        print(f"chat: {err}", file=sys.stderr)
        return 1
    return 0