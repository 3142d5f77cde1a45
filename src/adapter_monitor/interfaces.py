"""Host network interfaces: all, active and internet-connected views (read-only)."""

import ipaddress
import socket
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import psutil

from config.settings import settings

from ..utils.logger import get_logger, update_logger_command_context
from .constants import CONNECTIVITY_TARGETS, DEFAULT_CONNECTIVITY_TIMEOUT, INTERFACE_VIEWS
from .models import InterfaceInfo

logger = get_logger(__name__)


class InterfaceQueryError(Exception):
    """The operating system's interface tables could not be read."""


def _ip_addresses(addresses) -> Tuple[str, ...]:
    # IPv4 first, then IPv6; link-layer entries are not IP addresses
    ipv4 = [a.address for a in addresses if a.family == socket.AF_INET]
    ipv6 = [a.address for a in addresses if a.family == socket.AF_INET6]
    return tuple(ipv4 + ipv6)


def _is_loopback_address(address: str) -> bool:
    try:
        return ipaddress.ip_address(address.split('%', 1)[0]).is_loopback
    except ValueError:
        return False


def _is_loopback(stats, ip_addresses: Sequence[str]) -> bool:
    """Loopback per the interface flags, or when every address is a loopback one.

    Windows reports no flags, so the address check is what catches
    "Loopback Pseudo-Interface 1" there.
    """
    flags = getattr(stats, 'flags', '') or ''
    if 'loopback' in flags.split(','):
        return True
    return bool(ip_addresses) and all(_is_loopback_address(a) for a in ip_addresses)


def list_all_interfaces(descriptions: Optional[Mapping[str, str]] = None) -> List[InterfaceInfo]:
    """Every interface the host knows about, in the order the OS reports them.

    Args:
        descriptions: Optional name -> description lookup (e.g. from the adapter catalog)

    Raises:
        InterfaceQueryError: If the interface tables cannot be read
    """
    descriptions = descriptions or {}
    update_logger_command_context(logger, 'interfaces')
    try:
        addrs = psutil.net_if_addrs()
        stats = psutil.net_if_stats()
    except (OSError, psutil.Error) as e:
        logger.error(f"Failed to retrieve network interfaces: {e}")
        raise InterfaceQueryError(f"Failed to retrieve network interfaces: {e}") from e
    finally:
        update_logger_command_context(logger, 'idle')

    names = list(addrs)
    names.extend(name for name in stats if name not in addrs)

    interfaces = []
    for name in names:
        ip_addresses = _ip_addresses(addrs.get(name, ()))
        iface_stats = stats.get(name)
        interfaces.append(InterfaceInfo(
            name=name,
            description=descriptions.get(name, ""),
            is_up=bool(iface_stats is not None and iface_stats.isup),
            is_loopback=_is_loopback(iface_stats, ip_addresses),
            ip_addresses=ip_addresses,
        ))

    logger.debug(f"Found {len(interfaces)} network interfaces")
    return interfaces


def list_active_interfaces(descriptions: Optional[Mapping[str, str]] = None) -> List[InterfaceInfo]:
    """Interfaces that are up and are not loopback."""
    return [i for i in list_all_interfaces(descriptions) if i.is_up and not i.is_loopback]


def check_internet_connectivity(targets: Sequence[Tuple[str, int]] = CONNECTIVITY_TARGETS,
                                timeout: float = None) -> bool:
    """True as soon as a TCP connection to one of ``targets`` succeeds."""
    if timeout is None:
        timeout = settings.get('network.connectivity_timeout', DEFAULT_CONNECTIVITY_TIMEOUT)

    for host, port in targets:
        try:
            with socket.create_connection((host, port), timeout=timeout):
                logger.debug(f"Reached {host}:{port}")
                return True
        except OSError as e:
            logger.debug(f"Could not reach {host}:{port}: {e}")

    logger.info("No connectivity target reachable")
    return False


def list_internet_connected_interfaces(descriptions: Optional[Mapping[str, str]] = None,
                                       check: Callable[[], bool] = check_internet_connectivity
                                       ) -> List[InterfaceInfo]:
    """Active interfaces, or none when the host cannot reach the internet.

    Connectivity is checked for the host as a whole, not per interface.
    """
    active = list_active_interfaces(descriptions)
    if not active:
        return []
    return active if check() else []


_VIEWS: Dict[str, Callable[..., List[InterfaceInfo]]] = {
    "all": list_all_interfaces,
    "active": list_active_interfaces,
    "connected": list_internet_connected_interfaces,
}


def collect_interfaces(view: str = "all", descriptions: Optional[Mapping[str, str]] = None) -> List[InterfaceInfo]:
    """Dispatch to one of the interface views by name."""
    if view not in _VIEWS:
        raise ValueError(f"Unknown interface view '{view}', expected one of: {', '.join(INTERFACE_VIEWS)}")
    return _VIEWS[view](descriptions)
