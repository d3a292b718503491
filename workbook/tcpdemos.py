"""Small TCP programs: a clock server, an echoing server and a netcat client."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import socket
import sys
import threading
from datetime import datetime
from typing import BinaryIO, Callable, Optional

from .chat import _lines

logger = logging.getLogger(__name__)

_CHUNK = 32 * 1024


async def handle_clock(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter, interval: float = 1.0
) -> None:
    """Write the local time as HH:MM:SS every interval seconds until the client leaves."""
    try:
        while not writer.is_closing() and not reader.at_eof():
            writer.write(datetime.now().strftime("%H:%M:%S\n").encode("ascii"))
            await writer.drain()
            await asyncio.sleep(interval)
    except ConnectionError:
        pass  # e.g. client disconnected
    finally:
        writer.close()
        with contextlib.suppress(ConnectionError):
            await writer.wait_closed()


async def echo(writer, shout: str, delay: float = 1.0) -> None:
    """Write shout loudly, as given and quietly, delay seconds apart."""
    for position, text in enumerate((shout.upper(), shout, shout.lower())):
        if position:
            await asyncio.sleep(delay)
        writer.write(f"\t {text}\n".encode("utf-8"))
        await writer.drain()


async def _quiet_echo(writer, shout: str, delay: float) -> None:
    with contextlib.suppress(ConnectionError):
        await echo(writer, shout, delay)


async def handle_reverb(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter, delay: float = 1.0
) -> None:
    """Echo each line received, running the echoes of different lines concurrently.

    The connection is closed once input ends and every echo has finished.
    """
    echoes: set = set()
    try:
        async for shout in _lines(reader):
            echoes.add(asyncio.create_task(_quiet_echo(writer, shout, delay)))
        if echoes:
            await asyncio.gather(*echoes)
    finally:
        for task in echoes:
            task.cancel()
        writer.close()
        with contextlib.suppress(ConnectionError):
            await writer.wait_closed()


def _copy_from_socket(conn: socket.socket, stdout: BinaryIO) -> None:
    try:
        while data := conn.recv(_CHUNK):
            stdout.write(data)
            if hasattr(stdout, "flush"):
                stdout.flush()
    except OSError:
        pass
    logger.info("done")


def netcat(
    host: str = "localhost",
    port: int = 8000,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> None:
    """Copy stdin to a TCP server and the server's replies to stdout.

    Returns once stdin is exhausted and the server has closed its side.
    """
    stdin = sys.stdin.buffer if stdin is None else stdin
    stdout = sys.stdout.buffer if stdout is None else stdout
    with socket.create_connection((host, port)) as conn:
        receiver = threading.Thread(
            target=_copy_from_socket, args=(conn, stdout), daemon=True
        )
        receiver.start()
        read = getattr(stdin, "read1", None) or stdin.read
        while chunk := read(_CHUNK):
            conn.sendall(chunk)
        with contextlib.suppress(OSError):
            conn.shutdown(socket.SHUT_WR)
        receiver.join()


async def _serve(handler: Callable, host: str, port: int) -> None:
    server = await asyncio.start_server(handler, host, port)
    async with server:
        await server.serve_forever()


def _server_main(prog: str, argv: Optional[list], make_handler: Callable) -> int:
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--delay", type=float, default=1.0, help="seconds between writes")
    args = parser.parse_args(argv)
    try:
        asyncio.run(_serve(make_handler(args.delay), args.host, args.port))
    except KeyboardInterrupt:
        return 0
    except OSError as err:
        print(f"{prog}: {err}", file=sys.stderr)
        return 1
    return 0


def clock_main(argv: Optional[list] = None) -> int:
    """Serve the time to every client, concurrently."""
    return _server_main(
        "clock", argv, lambda delay: lambda r, w: handle_clock(r, w, delay)
    )


def reverb_main(argv: Optional[list] = None) -> int:
    """Serve an echo of each line every client sends."""
    return _server_main(
        "reverb", argv, lambda delay: lambda r, w: handle_reverb(r, w, delay)
    )


def netcat_main(argv: Optional[list] = None) -> int:
    """Connect standard input and output to a TCP server."""
    parser = argparse.ArgumentParser(prog="netcat", description=netcat_main.__doc__)
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s %(message)s", stream=sys.stderr, level=logging.INFO
    )
    try:
        netcat(args.host, args.port)
    except OSError as err:
        logger.error("%s", err)
        return 1
    return 0