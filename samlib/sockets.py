"""TCP listening, accepting and connecting helpers."""

from __future__ import annotations

import enum
import errno
import socket
from typing import Optional

BACKLOG = 10
_LOCALHOST = "127.0.0.1"


class SockFlag(enum.IntFlag):
    """Options for the socket helpers."""

    NONE = 0
    LOCAL = 1 << 0
    NONBLOCKING = 1 << 1


def socket_listen(port: int, flags: int = 0) -> socket.socket:
    """Return a TCP socket listening on ``port``.

    With ``SockFlag.LOCAL`` only the loopback address is bound; with
    ``SockFlag.NONBLOCKING`` the socket is non-blocking.
    """
    host = _LOCALHOST if flags & SockFlag.LOCAL else ""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(BACKLOG)
        if flags & SockFlag.NONBLOCKING:
            sock.setblocking(False)
    except OSError:
        sock.close()
        raise
    return sock


def socket_accept(sock: socket.socket, flags: int = 0) -> tuple[socket.socket, str]:
    """Accept a connection; returns the new socket and the peer's IP address."""
    conn, addr = sock.accept()
    try:
        conn.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    except OSError:
        pass
    if flags & SockFlag.NONBLOCKING:
        try:
            conn.setblocking(False)
        except OSError:
            conn.close()
            raise
    else:
        conn.setblocking(True)
    return conn, addr[0]


def _try_connect(info: tuple, flags: int) -> socket.socket:
    family, socktype, proto, _canon, sockaddr = info
    sock = socket.socket(family, socktype, proto)
    try:
        if flags & SockFlag.NONBLOCKING:
            sock.setblocking(False)
            err = sock.connect_ex(sockaddr)
            if err not in (0, errno.EINPROGRESS, errno.EAGAIN, errno.EWOULDBLOCK):
                raise OSError(err, errno.errorcode.get(err, "connect failed"))
        else:
            sock.connect(sockaddr)
    except OSError:
        sock.close()
        raise
    return sock


def socket_connect(hostname: str, port: int, flags: int = 0) -> socket.socket:
    """Connect over TCP to the first address of ``hostname`` that accepts.

    IPv6 is supported. With ``SockFlag.NONBLOCKING`` the connection may
    still be in progress when the socket is returned. Raises the last
    OSError if no address could be connected.
    """
    infos = socket.getaddrinfo(hostname, str(port), 0, socket.SOCK_STREAM)
    last_error: Optional[OSError] = None
    for info in infos:
        try:
            return _try_connect(info, flags)
        except OSError as err:
            last_error = err
    if last_error is None:
        raise OSError(errno.EHOSTUNREACH, f"no addresses for {hostname}")
    raise last_error