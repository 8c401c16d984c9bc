"""Network interface, address and default gateway queries."""

from __future__ import annotations

import errno
import ipaddress
import os
import socket
import subprocess
import sys
from typing import Iterable, Optional

import psutil

_ROUTE_FILE = "/proc/net/route"
_RTF_GATEWAY = 0x2


def _parse_route(lines: Iterable[str], ifname: str) -> Optional[ipaddress.IPv4Address]:
    """Find the default gateway of ``ifname`` in route-table lines."""
    for line in lines:
        fields = line.split()
        if len(fields) < 4 or fields[0] != ifname:
            continue
        try:
            dest = int(fields[1], 16)
            gateway = int(fields[2], 16)
            flags = int(fields[3], 16)
        except ValueError:
            continue
        if dest == 0 and flags & _RTF_GATEWAY:
            # The kernel prints the address in network byte order read as a
            # little-endian word.
            return ipaddress.IPv4Address(gateway.to_bytes(4, "little"))
    return None


def _parse_netstat(lines: Iterable[str], ifname: str) -> Optional[ipaddress.IPv4Address]:
    for line in lines:
        if not (line.startswith("default") or line.startswith("0.0.0.0")):
            continue
        if ifname not in line:
            continue
        fields = line[7:].split()
        if not fields:
            raise OSError(errno.EINVAL, "malformed route line")
        try:
            return ipaddress.IPv4Address(fields[0])
        except ValueError as err:
            raise OSError(errno.EINVAL, "malformed gateway address") from err
    return None


def get_gateway(ifname: str) -> Optional[ipaddress.IPv4Address]:
    """Return the default gateway reached through ``ifname``, or None.

    Raises OSError if the routing table cannot be read.
    """
    if sys.platform.startswith("linux") or os.path.exists(_ROUTE_FILE):
        with open(_ROUTE_FILE, "r", encoding="ascii", errors="replace") as fp:
            return _parse_route(fp, ifname)
    try:
        out = subprocess.run(["netstat", "-nr"], capture_output=True, text=True, check=False)
    except FileNotFoundError as err:
        raise OSError(errno.ENOENT, "netstat not available") from err
    return _parse_netstat(out.stdout.splitlines(), ifname)


def _ipv4_entries(ifname: str) -> list:
    return [a for a in psutil.net_if_addrs().get(ifname, []) if a.family == socket.AF_INET]


def get_interfaces() -> dict[str, bool]:
    """Return the non-loopback IPv4 interfaces mapped to whether each is up."""
    stats = psutil.net_if_stats()
    result: dict[str, bool] = {}
    for name, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            if ipaddress.IPv4Address(addr.address).is_loopback:
                continue
            st = stats.get(name)
            result[name] = bool(st and st.isup)
    return result


def ip_addr(
    ifname: str,
) -> tuple[ipaddress.IPv4Address, ipaddress.IPv4Address, Optional[ipaddress.IPv4Address]]:
    """Return the address, netmask and default gateway of ``ifname``.

    Raises OSError (ENODEV) if the interface has no IPv4 address.
    """
    entries = _ipv4_entries(ifname)
    if not entries:
        raise OSError(errno.ENODEV, os.strerror(errno.ENODEV), ifname)
    entry = entries[0]
    addr = ipaddress.IPv4Address(entry.address)
    mask = ipaddress.IPv4Address(entry.netmask or "0.0.0.0")
    return addr, mask, get_gateway(ifname)


def get_address(hostname: str) -> tuple[str, str]:
    """Resolve ``hostname`` to an IPv4 and an IPv6 address.

    Either string is empty when the name has no address of that family.
    Raises socket.gaierror when the name cannot be resolved.
    """
    ipv4 = ipv6 = ""
    for family, _type, _proto, _canon, sockaddr in socket.getaddrinfo(
        hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM
    ):
        if family == socket.AF_INET:
            ipv4 = sockaddr[0]
        elif family == socket.AF_INET6:
            ipv6 = sockaddr[0].split("%", 1)[0]
    return ipv4, ipv6


def get_address4(hostname: str) -> int:
    """Return the IPv4 address of ``hostname`` as a host-order integer, 0 if unknown."""
    try:
        return int(ipaddress.IPv4Address(socket.gethostbyname(hostname)))
    except OSError:
        return 0