"""
Base URL resolution for kanban deep links.

Sources, in priority order (first usable value wins):

1. ``SERVER_PUBLIC_BASE_URL``
2. ``VITE_APP_BASE_URL``
3. ``.dev-ports.json`` in the working directory (Vite dev server)
4. the backend port file registered under ``vibe-kanban``
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import structlog
from pydantic import ValidationError

from vk_common.models.notification import DevPorts
from vk_common.port_file import DEFAULT_APP_NAME, PortFileError, read_port_file

from .environment import Environment

logger = structlog.get_logger()

BASE_URL_ENV_VARS: tuple[str, ...] = ("SERVER_PUBLIC_BASE_URL", "VITE_APP_BASE_URL")
DEV_PORTS_FILE = ".dev-ports.json"
LOOPBACK = "127.0.0.1"
# Bind-all addresses are not connectable.
_WILDCARD_HOSTS = frozenset({"0.0.0.0", "::"})

PortLookup = Callable[[str], Awaitable[int]]


def normalize_base_url(value: str | None) -> str | None:
    """Trim *value* and drop trailing slashes; blank becomes ``None``."""
    if value is None:
        return None
    normalized = value.strip().rstrip("/").strip()
    return normalized or None


def connect_host(host: str | None) -> str:
    """Return a connectable host for the ``HOST`` bind address."""
    if host is None or host in _WILDCARD_HOSTS:
        return LOOPBACK
    return host


class BaseUrlResolver:
    """Resolve the base URL of the kanban web UI.

    Args:
        environment: Host environment for env vars and files.
        port_lookup: Async callable returning the registered backend
                     port for a service name.
        service_name: Port-file registry key.
    """

    def __init__(
        self,
        environment: Environment,
        *,
        port_lookup: PortLookup = read_port_file,
        service_name: str = DEFAULT_APP_NAME,
    ) -> None:
        self._env = environment
        self._port_lookup = port_lookup
        self._service_name = service_name

    async def resolve(self) -> str | None:
        """Return the first usable base URL, or ``None``."""
        for var in BASE_URL_ENV_VARS:
            url = normalize_base_url(self._env.getenv(var))
            if url is not None:
                logger.debug("base_url_resolved", source=var, url=url)
                return url

        url = await self._from_dev_ports()
        if url is not None:
            logger.debug("base_url_resolved", source=DEV_PORTS_FILE, url=url)
            return url

        url = await self._from_port_file()
        if url is not None:
            logger.debug("base_url_resolved", source="port_file", url=url)
            return url

        logger.debug("base_url_unresolved")
        return None

    async def _from_dev_ports(self) -> str | None:
        try:
            content = await self._env.read_text(self._env.cwd() / DEV_PORTS_FILE)
        except (OSError, UnicodeDecodeError):
            return None
        try:
            ports = DevPorts.model_validate_json(content)
        except ValidationError:
            logger.debug("dev_ports_invalid", file=DEV_PORTS_FILE)
            return None
        return f"http://{LOOPBACK}:{ports.frontend}"

    async def _from_port_file(self) -> str | None:
        try:
            port = await self._port_lookup(self._service_name)
        except PortFileError:
            return None
        host = connect_host(self._env.getenv("HOST"))
        return f"http://{host}:{port}"
